"""
Team lookups and membership resolution.

Answers "which teams does this user belong to" and "does this user administer
that team" for both registration and the per-request authorization checks.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.database.models import Team, TeamMembership

logger = logging.getLogger(__name__)


async def get_team_by_invite_code(session: AsyncSession, code: str) -> Optional[Dict]:
    """
    Resolve an invite code to its team.

    Args:
        session: Database session
        code: Invite code as entered (surrounding whitespace ignored)

    Returns:
        Team dictionary or None if no team uses that code
    """
    code = code.strip() if code else ""
    if not code:
        return None
    result = await session.execute(select(Team).where(Team.invite_code == code).limit(1))
    team = result.scalar_one_or_none()
    return _team_to_dict(team) if team else None


async def add_membership(session: AsyncSession, user_id: int, team_id: int, role: str) -> None:
    """Insert a membership row without committing (caller owns the transaction)."""
    session.add(TeamMembership(user_id=user_id, team_id=team_id, role=role))
    await session.flush()


async def list_teams_for_user(session: AsyncSession, user_id: int) -> List[Dict]:
    """Teams the user is a member of, with the user's role on each."""
    result = await session.execute(
        select(Team, TeamMembership.role)
        .join(TeamMembership, TeamMembership.team_id == Team.id)
        .where(TeamMembership.user_id == user_id)
        .order_by(Team.id)
    )
    teams = []
    for team, membership_role in result.all():
        data = _team_to_dict(team)
        data["membership_role"] = membership_role
        teams.append(data)
    return teams


async def get_membership_role(
    session: AsyncSession, user_id: int, team_id: int
) -> Optional[str]:
    """Role the user holds on this team, or None if not a member."""
    result = await session.execute(
        select(TeamMembership.role).where(
            TeamMembership.user_id == user_id, TeamMembership.team_id == team_id
        )
    )
    return result.scalar_one_or_none()


async def is_team_member(session: AsyncSession, user_id: int, team_id: int) -> bool:
    return await get_membership_role(session, user_id, team_id) is not None


async def is_team_admin(session: AsyncSession, user_id: int, team_id: int) -> bool:
    """True only when the user is the team's admin_id."""
    result = await session.execute(
        select(Team.id).where(Team.id == team_id, Team.admin_id == user_id)
    )
    return result.scalar_one_or_none() is not None


def _team_to_dict(team: Team) -> Dict:
    return {
        "id": team.id,
        "name": team.name,
        "season": team.season,
        "logo_url": team.logo_url,
        "admin_id": team.admin_id,
        "invite_code": team.invite_code,
    }
