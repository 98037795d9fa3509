"""
Authentication and authorization dependencies for FastAPI routes.

Every protected route depends on get_current_user, which turns the bearer
token into an immutable AuthContext. Routes that mutate team-scoped data then
run one of the ownership checks below before touching storage.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.config import Settings
from dugout.database.db import get_db_session
from dugout.services import player_service, team_service
from dugout.services.auth_service import AuthService
from dugout.services.errors import Conflict, Forbidden, NotFound, Unauthenticated
from dugout.services.password_hasher import PasswordHasher
from dugout.services.token_service import TokenService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must be a 401, not FastAPI's default 403.
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a verified token for the current request."""

    user_id: int
    role: str


# ---------------------------------------------------------------------------
# Component providers
# ---------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with (see create_app)."""
    return request.app.state.settings


@lru_cache
def _hasher_for(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


@lru_cache
def _token_service_for(secret: str, algorithm: str, days: int) -> TokenService:
    return TokenService(secret, algorithm=algorithm, expires_delta=timedelta(days=days))


def get_password_hasher(settings: Settings = Depends(get_app_settings)) -> PasswordHasher:
    return _hasher_for(settings.bcrypt_rounds)


def get_token_service(settings: Settings = Depends(get_app_settings)) -> TokenService:
    return _token_service_for(
        settings.jwt_secret, settings.jwt_algorithm, settings.token_expiration_days
    )


def get_auth_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(hasher, tokens)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """
    Dependency to get the current authenticated identity from the bearer token.

    No token is never treated as an anonymous caller: the request is rejected.

    Raises:
        Unauthenticated: Missing, malformed, tampered or expired token
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    claims = tokens.verify(credentials.credentials)
    if claims is None:
        raise Unauthenticated("Invalid authentication token")

    return AuthContext(user_id=claims.user_id, role=claims.role)


# ---------------------------------------------------------------------------
# Ownership checks
# ---------------------------------------------------------------------------


async def require_team_admin(session: AsyncSession, team_id: int, user: AuthContext) -> None:
    """
    Verify the caller is the admin of team_id.

    A team that does not exist is reported the same way as one the caller
    does not administer.

    Raises:
        Forbidden: Caller is not the team's admin
    """
    if not await team_service.is_team_admin(session, user.user_id, team_id):
        logger.warning(f"User {user.user_id} denied admin access to team {team_id}")
        raise Forbidden("Not authorized to manage players on this team")


async def require_player_admin(
    player_id: int,
    user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict:
    """
    Require that the caller administers the team owning player_id.

    Returns:
        The player dictionary

    Raises:
        NotFound: Player does not exist
        Forbidden: Caller is not the owning team's admin
    """
    found = await player_service.get_player_with_owning_team(session, player_id)
    if found is None:
        raise NotFound("Player not found")
    if found["team_admin_id"] != user.user_id:
        logger.warning(f"User {user.user_id} denied admin access to player {player_id}")
        raise Forbidden("Not authorized to modify this player")
    return found["player"]


async def require_player_member(session: AsyncSession, player_id: int, user: AuthContext) -> Dict:
    """
    Require that the caller belongs to the team owning player_id.

    Returns:
        The player dictionary

    Raises:
        NotFound: Player does not exist
        Forbidden: Caller has no membership on the owning team
    """
    found = await player_service.get_player_with_owning_team(session, player_id)
    if found is None:
        raise NotFound("Player not found")
    player = found["player"]
    if not await team_service.is_team_member(session, user.user_id, player["team_id"]):
        logger.warning(f"User {user.user_id} is not a member of team {player['team_id']}")
        raise Forbidden("Not a member of this player's team")
    return player


async def ensure_jersey_number_available(
    session: AsyncSession,
    team_id: int,
    jersey_number: int,
    exclude_player_id: Optional[int] = None,
) -> None:
    """
    Raises:
        Conflict: Another player on the team already wears jersey_number
    """
    if await player_service.has_conflicting_jersey_number(
        session, team_id, jersey_number, exclude_player_id
    ):
        raise Conflict()
