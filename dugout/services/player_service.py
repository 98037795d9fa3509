"""
Player and scouting report database operations.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.database.models import Player, PlayerStat, ScoutingReport, Team, TeamMembership
from dugout.services.errors import Conflict

logger = logging.getLogger(__name__)

PLAYER_FIELDS = ("name", "jersey_number", "position", "role", "email")


async def get_player_with_owning_team(session: AsyncSession, player_id: int) -> Optional[Dict]:
    """
    Load a player together with the admin of the team that owns it.

    Returns:
        {"player": {...}, "team_admin_id": int | None} or None if the player is absent
    """
    result = await session.execute(
        select(Player, Team.admin_id)
        .join(Team, Player.team_id == Team.id)
        .where(Player.id == player_id)
    )
    row = result.first()
    if row is None:
        return None
    player, admin_id = row
    return {"player": _player_to_dict(player), "team_admin_id": admin_id}


async def has_conflicting_jersey_number(
    session: AsyncSession,
    team_id: int,
    jersey_number: int,
    exclude_player_id: Optional[int] = None,
) -> bool:
    """
    Check whether another player on the team already wears this number.

    Args:
        session: Database session
        team_id: Team to search
        jersey_number: Number being claimed
        exclude_player_id: Player being edited, ignored in the search
    """
    query = select(Player.id).where(
        Player.team_id == team_id, Player.jersey_number == jersey_number
    )
    if exclude_player_id is not None:
        query = query.where(Player.id != exclude_player_id)
    result = await session.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def list_players_for_user(session: AsyncSession, user_id: int) -> List[Dict]:
    """Players on every team the user belongs to."""
    result = await session.execute(
        select(Player)
        .join(TeamMembership, TeamMembership.team_id == Player.team_id)
        .where(TeamMembership.user_id == user_id)
        .order_by(Player.team_id, Player.jersey_number)
    )
    return [_player_to_dict(p) for p in result.scalars().all()]


async def create_player(session: AsyncSession, team_id: int, **fields: Any) -> Dict:
    """
    Add a player to a team.

    Raises:
        Conflict: If the jersey number was taken concurrently
    """
    player = Player(team_id=team_id, **{k: fields.get(k) for k in PLAYER_FIELDS})
    session.add(player)
    await _flush_or_conflict(session)
    await session.commit()
    await session.refresh(player)
    return _player_to_dict(player)


async def update_player(session: AsyncSession, player_id: int, **fields: Any) -> Optional[Dict]:
    """
    Overwrite a player's editable fields.

    Returns:
        Updated player dictionary, or None if the player no longer exists

    Raises:
        Conflict: If the jersey number was taken concurrently
    """
    result = await session.execute(select(Player).where(Player.id == player_id))
    player = result.scalar_one_or_none()
    if player is None:
        return None
    for key in PLAYER_FIELDS:
        setattr(player, key, fields.get(key))
    await _flush_or_conflict(session)
    await session.commit()
    await session.refresh(player)
    return _player_to_dict(player)


async def delete_player(session: AsyncSession, player_id: int) -> bool:
    # Explicit child deletes: SQLite does not enforce ON DELETE CASCADE by default.
    await session.execute(delete(ScoutingReport).where(ScoutingReport.player_id == player_id))
    await session.execute(delete(PlayerStat).where(PlayerStat.player_id == player_id))
    result = await session.execute(delete(Player).where(Player.id == player_id))
    await session.commit()
    return result.rowcount > 0


async def get_scouting_report(session: AsyncSession, player_id: int) -> Optional[Dict]:
    report = await _find_report(session, player_id)
    return _report_to_dict(report) if report else None


async def _find_report(session: AsyncSession, player_id: int) -> Optional[ScoutingReport]:
    result = await session.execute(
        select(ScoutingReport).where(ScoutingReport.player_id == player_id)
    )
    return result.scalar_one_or_none()


def _apply_report(report: ScoutingReport, scout_id: int, fields: Dict[str, Any]) -> None:
    report.scout_id = scout_id
    for column in _REPORT_COLUMNS:
        setattr(report, column, fields.get(column))


async def upsert_scouting_report(
    session: AsyncSession, player_id: int, scout_id: int, fields: Dict[str, Any]
) -> Dict:
    """
    Create or replace the single scouting report for a player.

    Every assessment column is rewritten; columns absent from fields are cleared.
    When another writer creates the report between our lookup and our insert,
    the unique player_id index rejects the insert and that report is
    overwritten instead.

    Raises:
        Conflict: The report still could not be written after the retry
    """
    report = await _find_report(session, player_id)
    if report is None:
        report = ScoutingReport(player_id=player_id)
        session.add(report)
    _apply_report(report, scout_id, fields)

    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        report = await _find_report(session, player_id)
        if report is None:
            raise Conflict("Scouting report is being updated, try again")
        _apply_report(report, scout_id, fields)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            raise Conflict("Scouting report is being updated, try again")

    await session.commit()
    await session.refresh(report)
    return _report_to_dict(report)


async def _flush_or_conflict(session: AsyncSession) -> None:
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise Conflict()


_REPORT_COLUMNS = tuple(
    column.name
    for column in ScoutingReport.__table__.columns
    if column.name not in ("id", "player_id", "scout_id", "created_at", "updated_at")
)


def _player_to_dict(player: Player) -> Dict:
    return {
        "id": player.id,
        "team_id": player.team_id,
        "user_id": player.user_id,
        "name": player.name,
        "jersey_number": player.jersey_number,
        "position": player.position,
        "role": player.role,
        "email": player.email,
        "profile_pic_url": player.profile_pic_url,
    }


def _report_to_dict(report: ScoutingReport) -> Dict:
    data = {"id": report.id, "player_id": report.player_id, "scout_id": report.scout_id}
    for column in _REPORT_COLUMNS:
        value = getattr(report, column)
        data[column] = value.isoformat() if hasattr(value, "isoformat") else value
    return data
