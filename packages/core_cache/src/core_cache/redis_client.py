from __future__ import annotations
import logging
from typing import Optional
from redis import asyncio as aioredis
from core_config import Settings, get_settings
from core_logging import log_stage

_pool: Optional[aioredis.Redis] = None

def get_redis_pool(settings: Optional[Settings] = None, *, logger: Optional[logging.Logger] = None) -> aioredis.Redis:
    """Return a shared asyncio Redis client/pool built from ``REDIS_URL``.

    The client decodes responses to ``str``. Callers must not close it.
    """
    global _pool
    if _pool is None:
        s = settings or get_settings()
        _pool = aioredis.from_url(
            s.redis_url,
            encoding="utf-8",
            decode_responses=True,
            max_connections=s.redis_max_connections,
        )
        if logger is not None:
            log_stage(logger, "redis", "pool_init", max_connections=s.redis_max_connections)
    return _pool

async def close_redis_pool() -> None:
    """Close the shared pool (application shutdown)."""
    global _pool
    if _pool is not None:
        await _pool.aclose()
        _pool = None
