"""
Alembic environment for the roster schema.

Loaded two ways:
- by the alembic CLI (``cd dugout && alembic upgrade head``), where
  ``context.config`` is populated from alembic.ini;
- by the application at startup through run_migrations_programmatic(), which
  builds an in-memory Config pointing back at this directory.
"""

from logging.config import fileConfig
from pathlib import Path
import asyncio
import logging

from alembic import command, context
from alembic.config import Config
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from dugout.database.db import Base
from dugout.database import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

SCRIPT_DIR = Path(__file__).parent
target_metadata = Base.metadata


def _active_config():
    """The Config of the running migration, or None when merely imported."""
    try:
        return context.config
    except (AttributeError, NameError):
        return None


def _resolve_url(alembic_cfg: Config) -> str:
    url = alembic_cfg.get_main_option("sqlalchemy.url")
    if url:
        return url
    from dugout.config import get_settings

    return get_settings().database_url


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline(alembic_cfg: Config) -> None:
    """Emit SQL to stdout instead of touching a database (``alembic upgrade --sql``)."""
    _configure_and_run(
        url=_resolve_url(alembic_cfg),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def _run_on_connection(connection: Connection) -> None:
    _configure_and_run(connection=connection)


async def _run_online(alembic_cfg: Config) -> None:
    section = alembic_cfg.get_section(alembic_cfg.config_ini_section) or {}
    section["sqlalchemy.url"] = _resolve_url(alembic_cfg)
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


def run_migrations_online(alembic_cfg: Config) -> None:
    asyncio.run(_run_online(alembic_cfg))


def _upgrade_to_head(database_url: str) -> None:
    # No ini file: keep the application's logging configuration untouched.
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(SCRIPT_DIR))
    # configparser interpolates "%", which can appear in encoded passwords
    alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    command.upgrade(alembic_cfg, "head")


async def run_migrations_programmatic(database_url: str) -> None:
    """
    Upgrade the schema to head from inside the running application.

    Alembic's command API is synchronous and this env starts its own event
    loop for the async engine, so the upgrade runs in a worker thread.
    """
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, _upgrade_to_head, database_url)
    except Exception as e:
        logger.error(f"Migration execution failed: {e}", exc_info=True)
        raise
    logger.info("Migrations completed successfully")


_config = _active_config()
if _config is not None:
    if _config.config_file_name is not None:
        fileConfig(_config.config_file_name, disable_existing_loggers=False)
    if context.is_offline_mode():
        run_migrations_offline(_config)
    else:
        run_migrations_online(_config)
