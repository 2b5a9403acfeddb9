from __future__ import annotations
from typing import Any, Mapping

import orjson
from pydantic import BaseModel

__all__ = ["dumps", "dumps_strict", "loads", "sanitize", "to_jsonable"]

def sanitize(obj: Any) -> Any:
    """Recursively convert *obj* into something JSON-serialisable.

    - Exceptions → {"error": <Type>, "message": str(e)}
    - Pydantic models → model_dump(mode="json", by_alias=True)
    - bytes → UTF-8 string (replacement on errors)
    - sets/tuples → lists
    - anything else → isoformat() when available, else str(obj)
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, BaseException):
        return {"error": obj.__class__.__name__, "message": str(obj)}

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).decode("utf-8", "replace")

    if isinstance(obj, Mapping):
        return {str(k): sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [sanitize(v) for v in obj]

    if hasattr(obj, "isoformat"):
        try:
            return obj.isoformat()
        except (TypeError, ValueError):
            pass

    return str(obj)

def to_jsonable(obj: Any) -> Any:
    """Thin alias of `sanitize` kept for call-sites that read better with it."""
    return sanitize(obj)

def dumps(obj: Any, *, sort_keys: bool = True) -> str:
    """
    JSON dump that returns a *str* with deterministic key ordering.

    Sorted keys keep cache payloads and fingerprints stable regardless of
    dictionary insertion order. Values orjson cannot encode natively go
    through :func:`sanitize`.
    """
    option = orjson.OPT_SORT_KEYS if sort_keys else 0
    return orjson.dumps(obj, option=option, default=sanitize).decode("utf-8")

def _models_only(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")

def dumps_strict(obj: Any, *, sort_keys: bool = True) -> str:
    """
    Like :func:`dumps` but refuses values orjson cannot encode natively
    (pydantic models excepted) instead of stringifying them.

    Raises ``orjson.JSONEncodeError`` (a ``TypeError``).
    """
    option = orjson.OPT_SORT_KEYS if sort_keys else 0
    return orjson.dumps(obj, option=option, default=_models_only).decode("utf-8")

def loads(data: str | bytes | bytearray | memoryview) -> Any:
    """JSON load from str/bytes; a leading UTF-8 BOM is tolerated.

    Raises ``orjson.JSONDecodeError`` (a ``ValueError``) on malformed input.
    """
    if isinstance(data, str):
        b = data.encode("utf-8")
    else:
        b = bytes(data)
    if b[:3] == b"\xef\xbb\xbf":
        b = b[3:]
    return orjson.loads(b)
