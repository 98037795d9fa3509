"""
Demo data for local development.

Creates a coach (team admin), a player and a parent account, the
"Eagles Baseball" team with invite code TEAM123, a few roster entries and two
games. Safe to run repeatedly: existing rows are left alone.
"""

import logging
from datetime import date, time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from dugout.database.models import Game, Player, Role, Team, TeamMembership, User
from dugout.services.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"
DEMO_INVITE_CODE = "TEAM123"

DEMO_USERS = (
    ("Coach Johnson", "coach@team.com", Role.ADMIN.value),
    ("Mike Johnson", "player@team.com", Role.PLAYER.value),
    ("Parent Smith", "parent@team.com", Role.PARENT.value),
)

DEMO_PLAYERS = (
    ("Mike Johnson", 12, "Pitcher", "Starter", "mike.johnson@email.com"),
    ("Sarah Davis", 7, "Shortstop", "Starter", "sarah.davis@email.com"),
    ("Tom Wilson", 23, "Right Field", "Bench", "tom.wilson@email.com"),
)

DEMO_GAMES = (
    ("Tigers", date(2025, 7, 10), time(15, 0), "Central Park Field 1", "home", "upcoming"),
    ("Lions", date(2025, 7, 5), time(14, 0), "Lions Stadium", "away", "completed"),
)


async def seed_demo_data(session_factory: async_sessionmaker, hasher: PasswordHasher) -> None:
    """Insert the demo team and its members if they are not there yet."""
    async with session_factory() as session:
        password_hash = await hasher.hash(DEMO_PASSWORD)

        users = {}
        for name, email, role in DEMO_USERS:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            if user is None:
                user = User(name=name, email=email, password_hash=password_hash, role=role)
                session.add(user)
                await session.flush()
            users[email] = user

        admin = users["coach@team.com"]
        result = await session.execute(select(Team).where(Team.invite_code == DEMO_INVITE_CODE))
        team = result.scalar_one_or_none()
        if team is None:
            team = Team(
                name="Eagles Baseball",
                season="2025 Spring",
                admin_id=admin.id,
                invite_code=DEMO_INVITE_CODE,
            )
            session.add(team)
            await session.flush()

        for user in users.values():
            result = await session.execute(
                select(TeamMembership.id).where(
                    TeamMembership.user_id == user.id, TeamMembership.team_id == team.id
                )
            )
            if result.scalar_one_or_none() is None:
                session.add(TeamMembership(user_id=user.id, team_id=team.id, role=user.role))

        for name, number, position, role, email in DEMO_PLAYERS:
            result = await session.execute(
                select(Player.id).where(Player.team_id == team.id, Player.jersey_number == number)
            )
            if result.scalar_one_or_none() is None:
                session.add(
                    Player(
                        team_id=team.id,
                        name=name,
                        jersey_number=number,
                        position=position,
                        role=role,
                        email=email,
                    )
                )

        result = await session.execute(select(Game.id).where(Game.team_id == team.id).limit(1))
        if result.scalar_one_or_none() is None:
            for opponent, game_date, game_time, location, home_away, status in DEMO_GAMES:
                session.add(
                    Game(
                        team_id=team.id,
                        opponent=opponent,
                        game_date=game_date,
                        game_time=game_time,
                        location=location,
                        home_away=home_away,
                        status=status,
                    )
                )

        await session.commit()
    logger.info(f"Demo data ready (login coach@team.com / {DEMO_PASSWORD}, invite code {DEMO_INVITE_CODE})")
