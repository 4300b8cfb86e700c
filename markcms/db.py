"""
Database connection pool and RLS-scoped connection managers.

All database access goes through user_conn() or system_conn().
Never use pool.acquire() directly outside this module.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from markcms import config
from markcms.errors import BackendError

logger = logging.getLogger(__name__)

pool: asyncpg.Pool | None = None


async def init_pool() -> None:
    """
    Initialize the connection pool.
    Called once at application startup.
    """
    global pool
    pool = await asyncpg.create_pool(
        dsn=config.settings.DATABASE_URL,
        min_size=config.settings.DB_POOL_MIN_SIZE,
        max_size=config.settings.DB_POOL_MAX_SIZE,
        command_timeout=60,
        init=_init_connection,
    )


async def close_pool() -> None:
    """
    Close the connection pool.
    Called at application shutdown.
    """
    global pool
    if pool is not None:
        await pool.close()
        pool = None


async def _init_connection(conn: asyncpg.Connection) -> None:
    """
    Initialize each new connection.
    Sets up type codecs for UUID and JSON handling.
    """
    await conn.set_type_codec(
        "uuid",
        encoder=str,
        decoder=lambda x: UUID(x),
        schema="pg_catalog",
    )
    # theme_settings and event_data are JSONB
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


@asynccontextmanager
async def user_conn(user_id: str | UUID):
    """
    Acquire a database connection scoped to a specific user via RLS.

    Every query through this connection can only see/modify rows
    belonging to this user. Enforced by Postgres RLS policies.

    Usage:
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)

    Driver and server errors surface as BackendError so callers never
    depend on asyncpg directly.
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                # Set RLS context. All policies reference current_setting('app.user_id')
                await conn.execute(
                    "SELECT set_config('app.user_id', $1, true)",
                    str(user_id),
                )
                yield conn
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        logger.warning("database call failed for user %s: %s", user_id, e)
        raise BackendError(str(e)) from e


@asynccontextmanager
async def system_conn():
    """
    Acquire a database connection without user scoping.

    For system operations only: migrations, session lookup, and public
    reads such as the template catalogue.
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                # Reset RLS context so policies fall back to system access
                await conn.execute("SELECT set_config('app.user_id', '', true)")
                yield conn
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        logger.warning("system database call failed: %s", e)
        raise BackendError(str(e)) from e
