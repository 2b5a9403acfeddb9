"""
Classify PostgreSQL constraint violations surfaced through SQLAlchemy.

    try:
        session.flush()
    except IntegrityError as e:
        field, f = verify_duplicated_key(e)
        if f is not None:
            raise core_fault.conflict(f"{field} already taken") from f
        raise

Works with psycopg (``pgcode``/``diag.message_detail``), psycopg 3 and
asyncpg (``sqlstate``/``detail``) driver errors, bare or wrapped in a
``sqlalchemy.exc.DBAPIError``.
"""
from __future__ import annotations
import re
from http import HTTPStatus
from typing import Iterator, Optional

import core_fault

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_KEY_RE = re.compile(r"(?i)Key\s*\(\s*(.*?)\s*\)\s*=")

def _candidates(err: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    cur: Optional[BaseException] = err
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        yield cur
        orig = getattr(cur, "orig", None)
        if isinstance(orig, BaseException) and id(orig) not in seen:
            seen.add(id(orig))
            yield orig
        cur = cur.__cause__

def sqlstate_of(err: BaseException) -> str:
    for e in _candidates(err):
        for attr in ("sqlstate", "pgcode"):
            code = getattr(e, attr, None)
            if isinstance(code, str) and code:
                return code
    return ""

def detail_of(err: BaseException) -> str:
    for e in _candidates(err):
        diag = getattr(e, "diag", None)
        detail = getattr(diag, "message_detail", None) if diag is not None else None
        if not detail:
            detail = getattr(e, "detail", None)
        if isinstance(detail, str) and detail:
            return detail
    return ""

def _field(err: BaseException) -> str:
    m = _KEY_RE.search(detail_of(err))
    return m.group(1) if m else ""

def _check(err: Optional[BaseException], code: str, message: str) -> tuple[str, Optional[core_fault.Fault]]:
    if err is None or sqlstate_of(err) != code:
        return "", None
    f = core_fault.new(message, http_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                       tag=core_fault.DATABASE, cause=err)
    return _field(err), f

def verify_duplicated_key(err: Optional[BaseException]) -> tuple[str, Optional[core_fault.Fault]]:
    """``(field, Fault(DATABASE))`` for a unique violation, else ``("", None)``."""
    return _check(err, UNIQUE_VIOLATION, "duplicated constraint key")

def verify_foreign_key_violation(err: Optional[BaseException]) -> tuple[str, Optional[core_fault.Fault]]:
    """``(field, Fault(DATABASE))`` for a foreign-key violation, else ``("", None)``."""
    return _check(err, FOREIGN_KEY_VIOLATION, "foreign key constraint violation")

__all__ = [
    "UNIQUE_VIOLATION",
    "FOREIGN_KEY_VIOLATION",
    "sqlstate_of",
    "detail_of",
    "verify_duplicated_key",
    "verify_foreign_key_violation",
]
