from __future__ import annotations

from passlib.context import CryptContext

# bcrypt at the library's default cost
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def encode_password(password: str) -> str:
    """Hash password."""
    return pwd_context.hash(password)

def check_password(password: str, encoded: str) -> bool:
    """True when *password* matches *encoded*; malformed hashes never match."""
    if not encoded:
        return False
    try:
        return pwd_context.verify(password, encoded)
    except (ValueError, TypeError):
        return False

__all__ = ["pwd_context", "encode_password", "check_password"]
