from .redis_cache import CacheClient, ttl_ms
from .aside import get_or_set, delete
from .keys import cache_key
from .redis_client import get_redis_pool, close_redis_pool

__all__ = [
    "CacheClient",
    "ttl_ms",
    "get_or_set",
    "delete",
    "cache_key",
    "get_redis_pool",
    "close_redis_pool",
]
