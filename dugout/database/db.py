"""
Database connection and management using SQLAlchemy async mode.

The engine and session factory are built from Settings at startup and kept on
the FastAPI application state; nothing here opens a connection at import time.
"""

import asyncio
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.orm import DeclarativeBase

from dugout.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled async engine described by settings."""
    options = {
        "echo": settings.sql_echo,
        "future": True,
        "pool_pre_ping": True,  # Verify connections before using them
    }
    if not settings.database_url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    return create_async_engine(settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    Usage in FastAPI routes:
        async def my_route(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_database(engine: AsyncEngine):
    """Initialize the database by creating all tables."""
    # Import models to register them with Base.metadata
    from dugout.database import models  # noqa: F401

    async with engine.begin() as conn:
        # checkfirst=True means it won't error if tables already exist
        def create_tables(sync_conn):
            Base.metadata.create_all(bind=sync_conn, checkfirst=True)
        await conn.run_sync(create_tables)


async def wait_for_database(engine: AsyncEngine, retries: int = 10, delay: float = 3.0) -> bool:
    """
    Block startup until the database answers a trivial query.

    Args:
        engine: Engine to probe
        retries: Number of attempts before giving up
        delay: Seconds to sleep between attempts

    Returns:
        True once connected, False if every attempt failed
    """
    for attempt in range(retries, 0, -1):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected successfully")
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.info(f"Waiting for database... ({attempt - 1} retries left): {e}")
            if attempt > 1:
                await asyncio.sleep(delay)
    logger.error("Failed to connect to database after multiple retries")
    return False
