"""
Shared pytest configuration for the API tests.

Every test gets its own in-memory SQLite database (aiosqlite). StaticPool keeps
a single connection alive so the fixtures and the application under test see
the same data.
"""

import os

# Must be in place before dugout.api.main is imported: it builds the default app.
# Test apps get TEST_SETTINGS, which use a different secret.
os.environ.setdefault("JWT_SECRET", "process-env-secret")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dugout.config import Settings
from dugout.database.db import Base, build_session_factory
from dugout.database.models import Team, TeamMembership, User
from dugout.services.password_hasher import PasswordHasher
from dugout.services.token_service import TokenService

TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "password123"

TEST_SETTINGS = Settings(
    jwt_secret=TEST_SECRET,
    database_url="sqlite+aiosqlite:///:memory:",
    bcrypt_rounds=4,  # bcrypt minimum, keeps the suite fast
    run_migrations=False,
)


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    from dugout.database import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_headers(token_service):
    """Build an Authorization header for a user id/role pair."""

    def _headers(user_id, role="player"):
        return {"Authorization": f"Bearer {token_service.issue(user_id, role)}"}

    return _headers


@pytest_asyncio.fixture
async def client(session_factory):
    """
    HTTP client bound to an app wired to the test database.

    Lifespan is not run by ASGITransport, so the session factory is attached
    by hand. Unhandled errors come back as 500 responses instead of raising.
    """
    from dugout.api.main import create_app

    app = create_app(TEST_SETTINGS)
    app.state.session_factory = session_factory

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def teams(db_session, hasher):
    """
    Two teams with separate admins, plus a player and a parent on the first.

    Team 1 ("Eagles", invite TEAM123) is run by coach A; team 2 ("Hawks",
    invite HAWKS9) by coach B. Returns the ids of everything created.
    """
    digest = hasher.hash_sync(TEST_PASSWORD)
    coach_a = User(name="Coach A", email="coach.a@team.com", password_hash=digest, role="admin")
    coach_b = User(name="Coach B", email="coach.b@team.com", password_hash=digest, role="admin")
    player = User(name="Pat Player", email="pat@team.com", password_hash=digest, role="player")
    parent = User(name="Paula Parent", email="paula@team.com", password_hash=digest, role="parent")
    db_session.add_all([coach_a, coach_b, player, parent])
    await db_session.flush()

    eagles = Team(name="Eagles", season="2025 Spring", admin_id=coach_a.id, invite_code="TEAM123")
    hawks = Team(name="Hawks", season="2025 Spring", admin_id=coach_b.id, invite_code="HAWKS9")
    db_session.add_all([eagles, hawks])
    await db_session.flush()

    db_session.add_all(
        [
            TeamMembership(user_id=coach_a.id, team_id=eagles.id, role="admin"),
            TeamMembership(user_id=coach_b.id, team_id=hawks.id, role="admin"),
            TeamMembership(user_id=player.id, team_id=eagles.id, role="player"),
            TeamMembership(user_id=parent.id, team_id=eagles.id, role="parent"),
        ]
    )
    await db_session.commit()

    return {
        "coach_a": coach_a.id,
        "coach_b": coach_b.id,
        "player": player.id,
        "parent": parent.id,
        "team_1": eagles.id,
        "team_2": hawks.id,
    }
