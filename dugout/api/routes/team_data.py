"""Games, stats and media listings scoped to the caller's teams."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.api.auth_dependencies import AuthContext, get_current_user
from dugout.database.db import get_db_session
from dugout.services import data_service

router = APIRouter()


@router.get("/api/games")
async def list_games(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await data_service.list_games(session, current_user.user_id)


@router.get("/api/stats")
async def list_stats(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await data_service.list_player_stats(session, current_user.user_id)


@router.get("/api/media")
async def list_media(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await data_service.list_media(session, current_user.user_id)
