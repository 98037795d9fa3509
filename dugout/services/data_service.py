"""
Read-only queries for games, player statistics and media, scoped to the
teams a user belongs to.
"""

from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.database.models import Game, Media, Player, PlayerStat, TeamMembership


def _member_of(user_id: int, team_column):
    """Subquery-style filter: team_column belongs to one of the user's teams."""
    return team_column.in_(
        select(TeamMembership.team_id).where(TeamMembership.user_id == user_id)
    )


async def list_games(session: AsyncSession, user_id: int) -> List[Dict]:
    """Games of the user's teams, newest first."""
    result = await session.execute(
        select(Game)
        .where(_member_of(user_id, Game.team_id))
        .order_by(Game.game_date.desc(), Game.game_time.desc())
    )
    return [
        {
            "id": game.id,
            "team_id": game.team_id,
            "opponent": game.opponent,
            "game_date": game.game_date.isoformat(),
            "game_time": game.game_time.isoformat(),
            "location": game.location,
            "home_away": game.home_away,
            "status": game.status,
            "home_score": game.home_score,
            "away_score": game.away_score,
        }
        for game in result.scalars().all()
    ]


async def list_player_stats(session: AsyncSession, user_id: int) -> List[Dict]:
    """Raw per-game stat lines for players on the user's teams."""
    result = await session.execute(
        select(PlayerStat)
        .join(Player, PlayerStat.player_id == Player.id)
        .where(_member_of(user_id, Player.team_id))
        .order_by(PlayerStat.id)
    )
    return [
        {
            "id": stat.id,
            "player_id": stat.player_id,
            "game_id": stat.game_id,
            "at_bats": stat.at_bats,
            "hits": stat.hits,
            "rbis": stat.rbis,
            "runs": stat.runs,
            "strikeouts": stat.strikeouts,
            "walks": stat.walks,
            "innings_pitched": float(stat.innings_pitched) if stat.innings_pitched is not None else None,
            "earned_runs": stat.earned_runs,
        }
        for stat in result.scalars().all()
    ]


async def list_media(session: AsyncSession, user_id: int) -> List[Dict]:
    """Media entries of the user's teams, newest first."""
    result = await session.execute(
        select(Media)
        .where(_member_of(user_id, Media.team_id))
        .order_by(Media.created_at.desc(), Media.id.desc())
    )
    return [
        {
            "id": item.id,
            "team_id": item.team_id,
            "game_id": item.game_id,
            "title": item.title,
            "description": item.description,
            "file_type": item.file_type,
            "file_url": item.file_url,
            "file_size": item.file_size,
            "uploaded_by": item.uploaded_by,
            "created_at": item.created_at.isoformat() if item.created_at else None,
        }
        for item in result.scalars().all()
    ]
