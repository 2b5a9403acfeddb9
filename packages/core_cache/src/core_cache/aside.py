"""Cache-aside accessor.

    user = await get_or_set(cache, f"user:{uid}", timedelta(minutes=5),
                            lambda: repo.load_user(uid), model=User)

The producer is the source of truth: an unreachable or corrupt cache only
costs a recomputation. Concurrent misses on the same key may each run the
producer and each write; there is no single-flight coordination here.
"""
from __future__ import annotations
import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

import core_fault
from core_logging import log_cache_error
from core_utils import run_with_timeout

from core_cache.redis_cache import CacheClient, TTL

T = TypeVar("T")

Producer = Callable[[], Union[T, Awaitable[T]]]

__all__ = ["get_or_set", "delete"]

async def _get_or_set(client: CacheClient, key: str, ttl: TTL, producer: Producer, model: Optional[Any]) -> Any:
    try:
        cached = await client.get(key, model)
    except core_fault.Fault as exc:
        # Absent, undecodable or unreachable: all count as a miss
        if core_fault.get_tag(exc) != core_fault.NOT_FOUND:
            log_cache_error(client.logger, key=key, event="cache.get_failed", error=exc,
                            backend=client.backend)
    else:
        return cached

    value = producer()
    if inspect.isawaitable(value):
        value = await value

    try:
        await client.set(key, value, ttl)
    except core_fault.Fault as exc:
        log_cache_error(client.logger, key=key, event="cache.set_failed", error=exc,
                        backend=client.backend)
    return value

async def get_or_set(
    client: CacheClient,
    key: str,
    ttl: TTL,
    producer: Producer,
    *,
    model: Optional[Any] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    Return the cached value for *key*, or compute it with *producer*, store
    it for *ttl* and return it.

    - a hit never calls the producer
    - a producer exception propagates and nothing is written
    - a failed write is logged as a warning and the produced value is returned
    - *timeout* (seconds) bounds read + produce + write; expiry raises
      ``TimeoutError``. Cancellation propagates unchanged.
    """
    op = _get_or_set(client, key, ttl, producer, model)
    return await run_with_timeout(op, timeout, client.logger, stage="cache")

async def delete(client: CacheClient, *keys: str) -> int:
    """Remove *keys*; a backend failure raises a ``DATABASE`` Fault."""
    return await client.delete(*keys)
