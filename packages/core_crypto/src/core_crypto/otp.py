from __future__ import annotations
import hashlib
import hmac
import secrets
from typing import Union

Pepper = Union[bytes, str]

def gen_numeric_code(length: int) -> str:
    """Random decimal code of *length* digits (leading zeros kept)."""
    if length < 1:
        raise ValueError("invalid code length")
    return "".join(str(secrets.randbelow(10)) for _ in range(length))

def hash_otp(pepper: Pepper, user_id: str, purpose: str, code: str) -> bytes:
    """HMAC-SHA256 over ``user_id:purpose:code`` keyed by *pepper*."""
    key = pepper.encode("utf-8") if isinstance(pepper, str) else bytes(pepper)
    msg = f"{user_id}:{purpose}:{code}".encode("utf-8")
    return hmac.new(key, msg, hashlib.sha256).digest()

def equal_hash_otp(a: bytes, b: bytes) -> bool:
    return hmac.compare_digest(a, b)

__all__ = ["gen_numeric_code", "hash_otp", "equal_hash_otp"]
