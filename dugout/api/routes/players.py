"""Player roster route handlers. Mutations are limited to the team's admin."""

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.api.auth_dependencies import (
    AuthContext,
    ensure_jersey_number_available,
    get_current_user,
    require_player_admin,
    require_team_admin,
)
from dugout.database.db import get_db_session
from dugout.models.schemas import CreatePlayerRequest, UpdatePlayerRequest
from dugout.services import player_service
from dugout.services.errors import NotFound

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/players")
async def list_players(
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Players on every team the caller belongs to."""
    return await player_service.list_players_for_user(session, current_user.user_id)


@router.post("/api/players", status_code=201)
async def create_player(
    payload: CreatePlayerRequest,
    current_user: AuthContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Add a player to a team (team admin only).

    Request body:
        {
            "teamId": 1,
            "name": "Mike Johnson",
            "jerseyNumber": 12,
            "position": "Pitcher",
            "role": "Starter",
            "email": "mike@example.com"   // optional
        }
    """
    await require_team_admin(session, payload.team_id, current_user)
    await ensure_jersey_number_available(session, payload.team_id, payload.jersey_number)

    player = await player_service.create_player(
        session,
        team_id=payload.team_id,
        name=payload.name,
        jersey_number=payload.jersey_number,
        position=payload.position,
        role=payload.role,
        email=payload.email,
    )
    logger.info(f"User {current_user.user_id} added player {player['id']} to team {payload.team_id}")
    return player


@router.put("/api/players/{player_id}")
async def update_player(
    player_id: int,
    payload: UpdatePlayerRequest,
    player: Dict = Depends(require_player_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Replace a player's details (team admin only)."""
    await ensure_jersey_number_available(
        session, player["team_id"], payload.jersey_number, exclude_player_id=player_id
    )

    updated = await player_service.update_player(
        session,
        player_id,
        name=payload.name,
        jersey_number=payload.jersey_number,
        position=payload.position,
        role=payload.role,
        email=payload.email,
    )
    if updated is None:
        raise NotFound("Player not found")
    return updated


@router.delete("/api/players/{player_id}")
async def delete_player(
    player_id: int,
    player: Dict = Depends(require_player_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Remove a player and its scouting report and stats (team admin only)."""
    if not await player_service.delete_player(session, player_id):
        raise NotFound("Player not found")
    logger.info(f"Player {player_id} deleted from team {player['team_id']}")
    return {"message": "Player deleted successfully"}
