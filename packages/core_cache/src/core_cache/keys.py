from __future__ import annotations
import re
from core_utils.fingerprints import short_fp

_SAFE = re.compile(r"^[A-Za-z0-9_.\-]{1,64}$")

def _part(p: object) -> str:
    s = "" if p is None else str(p)
    return s if _SAFE.match(s) else short_fp(s)

def cache_key(namespace: str, *parts: object) -> str:
    """
    Namespaced cache key: ``cache_key("user", 42)`` → ``"user:42"``.

    Parts that are long or contain separators/whitespace are replaced by a
    stable fingerprint so raw input never lands in a Redis key.
    """
    if not namespace:
        raise ValueError("cache_key requires a namespace")
    return ":".join([namespace, *(_part(p) for p in parts)])
