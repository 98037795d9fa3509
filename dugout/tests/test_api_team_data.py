"""
Games, stats and media are only visible to members of the owning team.
"""
from datetime import date, time

import pytest
import pytest_asyncio

from dugout.database.models import Game, Media, Player, PlayerStat


@pytest_asyncio.fixture
async def schedule(db_session, teams):
    """One game, stat line and photo per team."""
    ids = {}
    for key, opponent, game_date in (("team_1", "Tigers", date(2025, 7, 10)), ("team_2", "Lions", date(2025, 7, 5))):
        team_id = teams[key]
        game = Game(
            team_id=team_id,
            opponent=opponent,
            game_date=game_date,
            game_time=time(15, 0),
            location="Central Park Field 1",
            home_away="home",
        )
        player = Player(team_id=team_id, name="Sam Slugger", jersey_number=9, position="First Base", role="Starter")
        db_session.add_all([game, player])
        await db_session.flush()

        stat = PlayerStat(player_id=player.id, game_id=game.id, at_bats=4, hits=2, innings_pitched=1.5)
        media = Media(
            team_id=team_id,
            game_id=game.id,
            title=f"{opponent} game",
            file_type="image",
            file_url=f"/uploads/{opponent.lower()}.jpg",
            uploaded_by=teams["coach_a"],
        )
        db_session.add_all([stat, media])
        await db_session.flush()
        ids[key] = {"game": game.id, "stat": stat.id, "media": media.id}

    await db_session.commit()
    return ids


@pytest.mark.asyncio
async def test_games_scoped_to_membership(client, teams, schedule, auth_headers):
    response = await client.get("/api/games", headers=auth_headers(teams["parent"], "parent"))
    assert response.status_code == 200
    [game] = response.json()
    assert game["id"] == schedule["team_1"]["game"]
    assert game["opponent"] == "Tigers"
    assert game["game_date"] == "2025-07-10"
    assert game["status"] == "upcoming"


@pytest.mark.asyncio
async def test_stats_scoped_to_membership(client, teams, schedule, auth_headers):
    response = await client.get("/api/stats", headers=auth_headers(teams["coach_b"], "admin"))
    assert response.status_code == 200
    [stat] = response.json()
    assert stat["id"] == schedule["team_2"]["stat"]
    assert stat["hits"] == 2
    assert stat["innings_pitched"] == 1.5


@pytest.mark.asyncio
async def test_media_scoped_to_membership(client, teams, schedule, auth_headers):
    response = await client.get("/api/media", headers=auth_headers(teams["player"]))
    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [schedule["team_1"]["media"]]


@pytest.mark.asyncio
async def test_user_without_teams_sees_nothing(client, schedule, auth_headers):
    for path in ("/api/games", "/api/stats", "/api/media", "/api/teams"):
        response = await client.get(path, headers=auth_headers(9999))
        assert response.status_code == 200
        assert response.json() == []


@pytest.mark.asyncio
async def test_team_data_requires_token(client):
    for path in ("/api/games", "/api/stats", "/api/media", "/api/teams"):
        response = await client.get(path)
        assert response.status_code == 401
