"""
asyncpg pool for the Postgres-backed repositories.

Only used when DATABASE_URL is set. Repositories borrow connections through
conn(); nothing else touches the pool.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from backend.config import settings

logger = logging.getLogger(__name__)

POOL_MIN_SIZE = 1
POOL_MAX_SIZE = 10

pool: asyncpg.Pool | None = None


async def _register_json_codecs(connection: asyncpg.Connection) -> None:
    """json/jsonb columns round-trip as Python dicts and lists."""
    for type_name in ("json", "jsonb"):
        await connection.set_type_codec(type_name, encoder=json.dumps, decoder=json.loads, schema="pg_catalog")


async def init_pool() -> None:
    global pool
    pool = await asyncpg.create_pool(
        dsn=settings.DATABASE_URL,
        min_size=POOL_MIN_SIZE,
        max_size=POOL_MAX_SIZE,
        init=_register_json_codecs,
    )
    logger.info("Database pool ready (%d-%d connections)", POOL_MIN_SIZE, POOL_MAX_SIZE)


async def close_pool() -> None:
    global pool
    if pool is None:
        return
    await pool.close()
    pool = None
    logger.info("Database pool closed")


@asynccontextmanager
async def conn() -> AsyncIterator[asyncpg.Connection]:
    """
    A pooled connection inside a transaction; commits on clean exit.

        async with conn() as c:
            row = await c.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    async with pool.acquire() as connection, connection.transaction():
        yield connection
