import logging
from typing import Any

import psycopg
import psycopg.rows
import psycopg_pool


logger = logging.getLogger(__name__)

pool: psycopg_pool.AsyncConnectionPool | None = None


async def init_pool(conninfo: str) -> None:
    """Initialize the async connection pool."""
    global pool
    pool = psycopg_pool.AsyncConnectionPool(
        conninfo=conninfo,
        min_size=2,
        max_size=10,
        open=False,
    )
    await pool.open()
    await pool.wait()
    logger.info("Database pool initialized")


async def close_pool() -> None:
    """Close the connection pool."""
    global pool
    if pool:
        await pool.close()
        pool = None
        logger.info("Database pool closed")


async def ping() -> bool:
    """True when a pooled connection can run a trivial query."""
    if not pool:
        return False
    try:
        async with pool.connection() as conn:
            await conn.execute("SELECT 1")
    except psycopg.Error:
        logger.warning("Database ping failed", exc_info=True)
        return False
    return True


async def fetch_one(
    conn: psycopg.AsyncConnection,
    query: str,
    params: dict[str, Any] | None = None,
) -> dict[str, Any] | None:
    """Execute a query and return one row as dict."""
    async with conn.cursor(row_factory=psycopg.rows.dict_row) as cur:
        await cur.execute(query, params or {})
        return await cur.fetchone()


async def fetch_all(
    conn: psycopg.AsyncConnection,
    query: str,
    params: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Execute a query and return all rows as dicts."""
    async with conn.cursor(row_factory=psycopg.rows.dict_row) as cur:
        await cur.execute(query, params or {})
        return await cur.fetchall()


async def execute(
    conn: psycopg.AsyncConnection,
    query: str,
    params: dict[str, Any] | None = None,
) -> int:
    """Execute a query and return the row count."""
    async with conn.cursor() as cur:
        await cur.execute(query, params or {})
        return cur.rowcount
