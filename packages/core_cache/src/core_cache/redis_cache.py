from __future__ import annotations
import functools
import inspect
import logging
from datetime import timedelta
from http import HTTPStatus
from typing import Any, Optional, Union

from pydantic import TypeAdapter
from redis.exceptions import RedisError

import core_fault
from core_logging import log_cache_hit, log_cache_miss, log_cache_set
from core_utils import jsonx

TTL = Union[int, float, timedelta]

async def _maybe_await(value: Any) -> Any:
    return await value if inspect.isawaitable(value) else value

@functools.lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)

def ttl_ms(ttl: TTL) -> int:
    """Normalise a TTL (seconds or timedelta) to whole milliseconds.

    Positive TTLs round up, so a sub-millisecond TTL still expires.
    """
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    if seconds <= 0:
        return 0
    # whole microseconds first so 0.3 s is 300 ms, not 301
    micros = round(seconds * 1_000_000)
    return max(1, -(-micros // 1000))

def _db_fault(message: str, cause: BaseException) -> core_fault.Fault:
    return core_fault.new(message, http_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                          tag=core_fault.DATABASE, cause=cause)

class CacheClient:
    """
    Thin wrapper over a redis client (``redis.asyncio`` or any sync/async
    object exposing ``get``/``set``/``delete``). Values are stored as JSON text.

    No retries here; callers own policies and timeouts. The logger is passed
    in explicitly and used for cache breadcrumbs.
    """
    def __init__(self, client: Any, logger: logging.Logger, *, backend: str = "redis"):
        if client is None:
            raise ValueError("CacheClient requires a valid redis client")
        if logger is None:
            raise ValueError("CacheClient requires a logger")
        self._r = client
        self.logger = logger
        self.backend = backend

    async def get(self, key: str, model: Optional[Any] = None) -> Any:
        """
        Read and decode *key*; *model* (any type pydantic can validate) shapes
        the result, otherwise the plain JSON value is returned.

        Raises a ``NOT_FOUND`` Fault when the key is absent and a ``DATABASE``
        Fault on backend or decode failures.
        """
        try:
            raw = await _maybe_await(self._r.get(key))
        except RedisError as exc:
            raise _db_fault("failed to get from cache", exc) from exc
        if raw is None:
            log_cache_miss(self.logger, key=key, backend=self.backend)
            raise core_fault.new("key not found", http_code=HTTPStatus.NOT_FOUND, tag=core_fault.NOT_FOUND)
        try:
            data = jsonx.loads(raw)
            value = _adapter(model).validate_python(data) if model is not None else data
        except ValueError as exc:
            raise _db_fault("failed to deserialize cached value", exc) from exc
        log_cache_hit(self.logger, key=key, backend=self.backend)
        return value

    async def set(self, key: str, value: Any, ttl: TTL) -> None:
        """Store *value* as JSON under *key*; ``ttl <= 0`` stores without expiry."""
        try:
            payload = jsonx.dumps_strict(value)
        except TypeError as exc:
            raise _db_fault("failed to serialize value", exc) from exc
        px = ttl_ms(ttl)
        try:
            if px > 0:
                await _maybe_await(self._r.set(key, payload, px=px))
            else:
                await _maybe_await(self._r.set(key, payload))
        except RedisError as exc:
            raise _db_fault("failed to set cache", exc) from exc
        log_cache_set(self.logger, key=key, backend=self.backend,
                      ttl_ms=px if px > 0 else None, bytes=len(payload))

    async def delete(self, *keys: str) -> int:
        """Remove *keys*; returns how many existed."""
        if not keys:
            return 0
        try:
            removed = await _maybe_await(self._r.delete(*keys))
        except RedisError as exc:
            raise _db_fault("failed to delete from cache", exc) from exc
        return int(removed or 0)
