import logging
import asyncpg
from asyncpg.pool import Pool
from asyncpg import Connection
from typing import AsyncGenerator
from fastapi import Request

from app.core.config import Settings
from app.core.exceptions import Unavailable, translate_store_errors


async def connect_db_pool(settings: Settings) -> Pool:
    try:
        db_pool = await asyncpg.create_pool(
            dsn=settings.asyncpg_url,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            timeout=settings.DB_POOL_TIMEOUT,
            ssl="require" if settings.DB_SSL else None,
        )
        logging.info("AsyncPG Connection Pool created successfully.")
        return db_pool
    except Exception as e:
        logging.error(f"Error connecting to database: {e}")
        raise


async def close_db_pool(db_pool: Pool | None):
    if db_pool:
        await db_pool.close()
        logging.info("AsyncPG Connection Pool closed.")


async def get_db_connection(request: Request) -> AsyncGenerator[Connection, None]:
    db_pool: Pool | None = getattr(request.app.state, "db_pool", None)
    if db_pool is None:
        logging.error("Database pool is not initialized.")
        raise Unavailable("Database unavailable")

    timeout = request.app.state.settings.DB_ACQUIRE_TIMEOUT
    with translate_store_errors("Database unavailable"):
        connection = await db_pool.acquire(timeout=timeout)
    try:
        yield connection
    finally:
        await db_pool.release(connection)
