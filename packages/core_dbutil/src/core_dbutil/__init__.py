from .errors import (
    UNIQUE_VIOLATION,
    FOREIGN_KEY_VIOLATION,
    sqlstate_of,
    detail_of,
    verify_duplicated_key,
    verify_foreign_key_violation,
)
from .tx import exec_tx, aexec_tx
from .jsonb import JSONB

__all__ = [
    "UNIQUE_VIOLATION",
    "FOREIGN_KEY_VIOLATION",
    "sqlstate_of",
    "detail_of",
    "verify_duplicated_key",
    "verify_foreign_key_violation",
    "exec_tx",
    "aexec_tx",
    "JSONB",
]
