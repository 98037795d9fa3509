"""Scouting report route handlers. Any member of the player's team may write."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.api.auth_dependencies import AuthContext, get_current_user, require_player_member
from dugout.database.db import get_db_session
from dugout.models.schemas import ScoutingReportRequest
from dugout.services import player_service
from dugout.services.errors import NotFound

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/api/scouting-reports", status_code=201)
async def save_scouting_report(
    payload: ScoutingReportRequest,
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create or replace the scouting report for a player; the caller becomes its scout."""
    await require_player_member(session, payload.player_id, current_user)
    report = await player_service.upsert_scouting_report(
        session,
        player_id=payload.player_id,
        scout_id=current_user.user_id,
        fields=payload.report_fields(),
    )
    logger.info(f"User {current_user.user_id} saved scouting report for player {payload.player_id}")
    return report


@router.get("/api/players/{player_id}/scouting-report")
async def get_scouting_report(
    player_id: int,
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await require_player_member(session, player_id, current_user)
    report = await player_service.get_scouting_report(session, player_id)
    if report is None:
        raise NotFound("Scouting report not found")
    return report
