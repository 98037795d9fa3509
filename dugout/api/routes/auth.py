"""Authentication route handlers."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.api.routes import limiter, auth_rate_limit
from dugout.api.auth_dependencies import AuthContext, get_auth_service, get_current_user
from dugout.database.db import get_db_session
from dugout.models.schemas import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest
from dugout.services import user_service
from dugout.services.auth_service import AuthService
from dugout.services.errors import NotFound

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/api/auth/login", response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
async def login(
    request: Request,
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
):
    """Login with email and password."""
    return await auth.login(session, payload.email, payload.password)


@router.post("/api/auth/register", response_model=AuthResponse, status_code=201)
@limiter.limit(auth_rate_limit)
async def register(
    request: Request,
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Create an account with a team invite code.

    The account's default role and its membership role on the invited team
    are both the declared role (player or parent).
    """
    return await auth.register(
        session,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        invite_code=payload.code,
        role=payload.role,
    )


@router.get("/api/auth/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get the authenticated user's profile."""
    user = await user_service.get_user_by_id(session, current_user.user_id)
    if user is None:
        raise NotFound("User not found")
    return {"user": user}
