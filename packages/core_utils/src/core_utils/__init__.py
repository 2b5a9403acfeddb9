from . import jsonx, uid
from .async_timeout import run_with_timeout
from .fingerprints import sha256_hex, short_fp

__all__ = [
    "jsonx",
    "uid",
    "run_with_timeout",
    "sha256_hex",
    "short_fp",
]
