"""Time-sortable unique identifiers.

Layout (12 bytes, hex-encoded → 24 chars):
  • 4 bytes big-endian seconds since ``EPOCH_SECONDS``
  • 8 bytes from ``os.urandom``

Newer ids sort lexicographically after older ones (1-second resolution).
An optional prefix is joined with ``_``: ``new("invoice")`` → ``invoice_0a1b…``.
"""

from __future__ import annotations
import os
import re
import time

__all__ = ["EPOCH_SECONDS", "new", "is_valid", "timestamp_of"]

EPOCH_SECONDS = 1_700_000_000

_BODY_LEN = 24
_BODY_RE = re.compile(r"^[0-9a-f]{24}$")
_PREFIX_RE = re.compile(r"^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)*$")


def new(prefix: str = "") -> str:
    t = int(time.time()) - EPOCH_SECONDS
    buf = (t & 0xFFFFFFFF).to_bytes(4, "big") + os.urandom(8)
    if not prefix:
        return buf.hex()
    return f"{prefix}_{buf.hex()}"


def _split(value: str) -> tuple[str, str]:
    if len(value) > _BODY_LEN and value[-_BODY_LEN - 1] == "_":
        return value[: -_BODY_LEN - 1], value[-_BODY_LEN:]
    return "", value


def is_valid(value: object) -> bool:
    """True when *value* has the shape produced by :func:`new`."""
    if not isinstance(value, str) or not value:
        return False
    prefix, body = _split(value)
    if len(value) > _BODY_LEN and not prefix:
        return False
    if prefix and not _PREFIX_RE.match(prefix):
        return False
    return bool(_BODY_RE.match(body))


def timestamp_of(value: str) -> int:
    """Unix seconds encoded in *value*; raises ValueError for malformed ids."""
    if not is_valid(value):
        raise ValueError(f"invalid uid: {value!r}")
    _, body = _split(value)
    return int(body[:8], 16) + EPOCH_SECONDS
