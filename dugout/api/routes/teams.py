"""Team route handlers."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.api.auth_dependencies import AuthContext, get_current_user
from dugout.database.db import get_db_session
from dugout.services import team_service

router = APIRouter()


@router.get("/api/teams")
async def list_my_teams(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Teams the caller belongs to, with the caller's role on each."""
    return await team_service.list_teams_for_user(session, current_user.user_id)
