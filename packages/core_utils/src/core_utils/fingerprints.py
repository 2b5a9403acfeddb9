import hashlib
from hashlib import blake2s
from typing import Union

__all__ = ["sha256_hex", "short_fp"]

def sha256_hex(data: Union[str, bytes, bytearray, memoryview]) -> str:
    """Return hex SHA-256 digest. Accepts str and bytes-like; strings are UTF-8 encoded."""
    if isinstance(data, str):
        b = data.encode("utf-8")
    elif isinstance(data, (bytes, bytearray, memoryview)):
        b = bytes(data)
    else:
        raise TypeError(f"sha256_hex expects str or bytes-like, got {type(data).__name__}")
    return hashlib.sha256(b).hexdigest()

def short_fp(*parts: object) -> str:
    """
    Stable, compact fingerprint for values we don't want to embed verbatim
    into cache keys or log lines (keeps them short and privacy-friendly).
    """
    h = blake2s(digest_size=10)
    for p in parts:
        h.update(("" if p is None else str(p)).encode("utf-8"))
        h.update(b"|")
    return h.hexdigest()
