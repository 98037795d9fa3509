"""
Tests for scouting reports: one report per player, writable by any member of
the player's team.
"""
import pytest
import pytest_asyncio
from sqlalchemy import func, select

from dugout.database.models import ScoutingReport
from dugout.services import player_service


@pytest_asyncio.fixture
async def mike(client, teams, auth_headers):
    response = await client.post(
        "/api/players",
        json={
            "teamId": teams["team_1"],
            "name": "Mike Johnson",
            "jerseyNumber": 12,
            "position": "Pitcher",
            "role": "Starter",
        },
        headers=auth_headers(teams["coach_a"], "admin"),
    )
    return response.json()


@pytest.mark.asyncio
async def test_member_saves_report(client, mike, teams, auth_headers):
    response = await client.post(
        "/api/scouting-reports",
        json={
            "playerId": mike["id"],
            "height": "5'10\"",
            "birthDate": "2010-04-02",
            "power": 7,
            "range": 8,
            "baseRunningIQ": "Good",
            "overallGrade": 6,
            "strengths": "Quick hands",
        },
        headers=auth_headers(teams["player"]),
    )
    assert response.status_code == 201
    report = response.json()
    assert report["player_id"] == mike["id"]
    assert report["scout_id"] == teams["player"]
    assert report["birth_date"] == "2010-04-02"
    assert report["power"] == 7
    assert report["range_rating"] == 8
    assert report["base_running_iq"] == "Good"
    assert report["strengths"] == "Quick hands"


@pytest.mark.asyncio
async def test_saving_again_replaces_report(client, mike, teams, auth_headers):
    await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 7, "strengths": "Quick hands"},
        headers=auth_headers(teams["player"]),
    )
    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 9},
        headers=auth_headers(teams["parent"], "parent"),
    )
    assert response.status_code == 201

    response = await client.get(
        f"/api/players/{mike['id']}/scouting-report", headers=auth_headers(teams["coach_a"], "admin")
    )
    assert response.status_code == 200
    report = response.json()
    assert report["power"] == 9
    assert report["strengths"] is None
    assert report["scout_id"] == teams["parent"]


@pytest.mark.asyncio
async def test_first_save_that_loses_the_race_overwrites(
    client, session_factory, mike, teams, auth_headers, monkeypatch
):
    """Another member creates the report between our lookup and insert: ours replaces it."""
    real_find_report = player_service._find_report
    lookups = []

    async def racing_find_report(session, player_id):
        lookups.append(player_id)
        if len(lookups) == 1:
            async with session_factory() as other:
                other.add(ScoutingReport(player_id=player_id, scout_id=teams["parent"], power=3, strengths="Eager"))
                await other.commit()
            return None
        return await real_find_report(session, player_id)

    monkeypatch.setattr(player_service, "_find_report", racing_find_report)

    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 9},
        headers=auth_headers(teams["player"]),
    )
    assert response.status_code == 201
    report = response.json()
    assert report["power"] == 9
    assert report["strengths"] is None
    assert report["scout_id"] == teams["player"]

    async with session_factory() as session:
        result = await session.execute(
            select(func.count(ScoutingReport.id)).where(ScoutingReport.player_id == mike["id"])
        )
        assert result.scalar_one() == 1


@pytest.mark.asyncio
async def test_report_vanishing_during_retry_is_conflict(
    client, session_factory, mike, teams, auth_headers, monkeypatch
):
    async def always_missing(session, player_id):
        async with session_factory() as other:
            exists = await other.execute(
                select(func.count(ScoutingReport.id)).where(ScoutingReport.player_id == player_id)
            )
            if not exists.scalar_one():
                other.add(ScoutingReport(player_id=player_id, scout_id=teams["parent"]))
                await other.commit()
        return None

    monkeypatch.setattr(player_service, "_find_report", always_missing)

    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 9},
        headers=auth_headers(teams["player"]),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "conflict"


@pytest.mark.asyncio
async def test_non_member_cannot_save(client, mike, teams, auth_headers):
    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 1},
        headers=auth_headers(teams["coach_b"], "admin"),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_non_member_cannot_read(client, mike, teams, auth_headers):
    response = await client.get(
        f"/api/players/{mike['id']}/scouting-report", headers=auth_headers(teams["coach_b"], "admin")
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_report_for_missing_player(client, teams, auth_headers):
    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": 9999, "power": 5},
        headers=auth_headers(teams["player"]),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_no_report_yet(client, mike, teams, auth_headers):
    response = await client.get(
        f"/api/players/{mike['id']}/scouting-report", headers=auth_headers(teams["player"])
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Scouting report not found", "code": "not_found"}


@pytest.mark.asyncio
async def test_ratings_are_bounded(client, mike, teams, auth_headers):
    response = await client.post(
        "/api/scouting-reports",
        json={"playerId": mike["id"], "power": 11, "speed": 0},
        headers=auth_headers(teams["player"]),
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"power", "speed"}
