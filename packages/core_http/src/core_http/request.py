from __future__ import annotations
import json
import re
from collections.abc import Mapping as _MappingABC
from typing import Any, Callable, Mapping, Optional, Type, TypeVar, get_args, get_origin

from fastapi import Request
from pydantic import BaseModel, ValidationError

import core_fault
from core_config.constants import MAX_REQUEST_BODY_BYTES
from core_http.headers import X_FORWARDED_FOR, X_REAL_IP
from core_http.sentinel import (
    BodyTooLarge,
    EmptyRequestBody,
    InvalidJSONField,
    MalformedJSON,
    MultipleJSONValues,
    UnknownRequestBodyKey,
)

M = TypeVar("M", bound=BaseModel)

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}
_decoder = json.JSONDecoder()

# ---------------------------------------------------------------------------
# Request body
# ---------------------------------------------------------------------------

async def _read_limited(request: Request, max_bytes: int) -> bytes:
    buf = bytearray()
    async for chunk in request.stream():
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise BodyTooLarge(max_bytes)
    return bytes(buf)

def _decode_single(raw: bytes) -> Any:
    text = raw.decode("utf-8", errors="replace").lstrip("\ufeff")
    start = len(text) - len(text.lstrip())
    if start == len(text):
        raise EmptyRequestBody()
    try:
        value, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as e:
        raise MalformedJSON(e.pos) from e
    if text[end:].strip():
        raise MultipleJSONValues()
    return value

def _field_for(model: Type[BaseModel], key: str) -> Any:
    for name, info in model.model_fields.items():
        if key == name or key == info.alias or key == info.validation_alias:
            return info
    return None

def _nested_models(annotation: Any) -> list[Type[BaseModel]]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return [annotation]
    origin = get_origin(annotation)
    # mapping keys are data, not field names
    if isinstance(origin, type) and issubclass(origin, _MappingABC):
        return []
    out: list[Type[BaseModel]] = []
    for arg in get_args(annotation):
        out.extend(_nested_models(arg))
    return out

def _check_unknown_keys(value: Any, model: Type[BaseModel], path: str = "") -> None:
    if not isinstance(value, dict):
        return
    for key, item in value.items():
        info = _field_for(model, key)
        if info is None:
            raise UnknownRequestBodyKey(f"{path}{key}")
        models = _nested_models(info.annotation)
        if len(models) != 1:
            continue
        if isinstance(item, dict):
            _check_unknown_keys(item, models[0], f"{path}{key}.")
        elif isinstance(item, list):
            for i, elem in enumerate(item):
                _check_unknown_keys(elem, models[0], f"{path}{key}.{i}.")

def _is_type_error(err_type: str) -> bool:
    return err_type.endswith("_type") or err_type.endswith("_parsing")

def decode_body(raw: bytes, model: Type[M]) -> M:
    """
    Decode *raw* into *model* with strict request-body rules.

    Raises a :class:`~core_http.sentinel.RequestBodyError` for transport-level
    problems (empty, malformed, trailing data, unknown keys, wrong types) and a
    422 validation Fault when the document is well-formed but fails the model's
    own rules.
    """
    value = _decode_single(raw)
    _check_unknown_keys(value, model)
    try:
        return model.model_validate(value)
    except ValidationError as e:
        errors = e.errors()
        for err in errors:
            if _is_type_error(str(err.get("type", ""))):
                loc = ".".join(str(p) for p in err.get("loc") or ())
                raise InvalidJSONField(loc) from e
        fields = [
            core_fault.FieldError(
                field=".".join(str(p) for p in err.get("loc") or ()) or "general",
                message=str(err.get("msg") or "invalid value"),
            )
            for err in errors
        ]
        raise core_fault.validation("invalid body", field_errors=fields, cause=e) from e

async def read_request_body(request: Request, model: Type[M], *, max_bytes: Optional[int] = None) -> M:
    limit = MAX_REQUEST_BODY_BYTES if max_bytes is None else int(max_bytes)
    raw = await _read_limited(request, limit)
    return decode_body(raw, model)

def validated_body(model: Type[M], *, max_bytes: Optional[int] = None) -> Callable[[Request], Any]:
    """FastAPI dependency: ``body: User = Depends(validated_body(User))``."""

    async def _dependency(request: Request) -> M:
        return await read_request_body(request, model, max_bytes=max_bytes)

    _dependency.__name__ = f"validated_body_{model.__name__}"
    return _dependency

# ---------------------------------------------------------------------------
# Query string
# ---------------------------------------------------------------------------

def read_query_string(qs: Mapping[str, str], key: str) -> str:
    return qs.get(key) or ""

def read_query_int(qs: Mapping[str, str], key: str) -> int:
    """Integer value of *key*; missing or unparseable values read as 0."""
    v = read_query_int_optional(qs, key)
    return 0 if v is None else v

def read_query_int_optional(qs: Mapping[str, str], key: str) -> Optional[int]:
    val = qs.get(key) or ""
    if not _INT_RE.match(val):
        return None
    return int(val)

def read_query_bool(qs: Mapping[str, str], key: str) -> bool:
    return bool(read_query_bool_optional(qs, key))

def read_query_bool_optional(qs: Mapping[str, str], key: str) -> Optional[bool]:
    val = qs.get(key) or ""
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return None

def read_query_string_optional(qs: Mapping[str, str], key: str) -> Optional[str]:
    return qs.get(key) or None

def read_query_array(qs: Mapping[str, str], key: str) -> list[str]:
    """``?tags=user, admin`` → ``["user", "admin"]``; missing → ``[]``."""
    val = qs.get(key) or ""
    if not val:
        return []
    return [p.strip() for p in val.split(",")]

def read_query_array_optional(qs: Mapping[str, str], key: str) -> Optional[list[str]]:
    return read_query_array(qs, key) or None

# ---------------------------------------------------------------------------
# Client address
# ---------------------------------------------------------------------------

def _strip_port(addr: str) -> str:
    if addr.startswith("["):
        end = addr.find("]")
        return addr[1:end] if end != -1 else addr
    # bare IPv6 without brackets has no port
    if addr.count(":") == 1:
        return addr.rsplit(":", 1)[0]
    return addr

def client_ip_from(headers: Mapping[str, str], remote_addr: str = "") -> str:
    """
    Client address: first ``X-Forwarded-For`` entry, then ``X-Real-IP``, then
    *remote_addr* with brackets and port removed.

    Proxy headers are client-controlled; only trust them behind a proxy that
    rewrites them.
    """
    xff = headers.get(X_FORWARDED_FOR) or ""
    if xff:
        return xff.split(",")[0].strip()
    xri = headers.get(X_REAL_IP) or ""
    if xri:
        return xri.strip()
    return _strip_port(remote_addr or "")

def get_client_ip(request: Request) -> str:
    host = request.client.host if request.client else ""
    return client_ip_from(request.headers, host)

__all__ = [
    "decode_body",
    "read_request_body",
    "validated_body",
    "read_query_string",
    "read_query_string_optional",
    "read_query_int",
    "read_query_int_optional",
    "read_query_bool",
    "read_query_bool_optional",
    "read_query_array",
    "read_query_array_optional",
    "client_ip_from",
    "get_client_ip",
]
