import asyncio

import asyncpg
import orjson

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Global connection pools per event loop
asyncpg_pools: dict[int, asyncpg.Pool] = {}


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns (rule conditions, tier price tables) with orjson"""
    for type_name in ('json', 'jsonb'):
        await conn.set_type_codec(
            type_name,
            encoder=lambda value: orjson.dumps(value).decode(),
            decoder=orjson.loads,
            schema='pg_catalog',
        )


async def get_asyncpg_pool() -> asyncpg.Pool:
    current_loop = asyncio.get_running_loop()
    loop_id = id(current_loop)

    # Fast path: pool already exists for this loop
    if loop_id in asyncpg_pools:
        return asyncpg_pools[loop_id]

    # Slow path: create new pool (should only happen at startup)
    pool = await asyncpg.create_pool(
        settings.DATABASE_URL_ASYNC,
        min_size=settings.ASYNCPG_POOL_MIN_SIZE,
        max_size=settings.ASYNCPG_POOL_MAX_SIZE,
        command_timeout=settings.ASYNCPG_POOL_COMMAND_TIMEOUT,
        max_inactive_connection_lifetime=settings.ASYNCPG_POOL_MAX_INACTIVE_LIFETIME,
        timeout=settings.ASYNCPG_POOL_TIMEOUT,
        init=_init_connection,
    )
    Logger.base.info(
        f'🏊 [Pool] Created asyncpg pool (min={settings.ASYNCPG_POOL_MIN_SIZE}, '
        f'max={settings.ASYNCPG_POOL_MAX_SIZE})'
    )

    asyncpg_pools[loop_id] = pool
    return pool


async def close_all_asyncpg_pools() -> None:
    """
    Close all asyncpg connection pools across all event loops

    Warning: Only call this during application shutdown.
    """
    for _, pool in list(asyncpg_pools.items()):
        try:
            await pool.close()
        except Exception as e:
            Logger.base.warning(f'⚠️ [Pool] Error while closing asyncpg pool: {e}')
    asyncpg_pools.clear()
