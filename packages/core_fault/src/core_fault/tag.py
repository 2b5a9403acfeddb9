from __future__ import annotations

__all__ = [
    "Tag",
    "UNTAGGED",
    "BAD_REQUEST",
    "NOT_FOUND",
    "INTERNAL_SERVER_ERROR",
    "UNAUTHORIZED",
    "FORBIDDEN",
    "CONFLICT",
    "TOO_MANY_REQUESTS",
    "VALIDATION_ERROR",
    "UNPROCESSABLE_ENTITY",
    "DATABASE",
    "TRANSACTION",
]


class Tag(str):
    """
    Semantic error category used for programmatic branching, independent of
    the HTTP status.

    The set is open: services declare their own tags next to the built-ins::

        PAYMENT_DECLINED = Tag("PAYMENT_DECLINED")

    Tags compare equal to their plain string value.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Tag({str.__repr__(self)})"


UNTAGGED = Tag("UNTAGGED")
BAD_REQUEST = Tag("BAD_REQUEST")
NOT_FOUND = Tag("NOT_FOUND")
INTERNAL_SERVER_ERROR = Tag("INTERNAL_SERVER_ERROR")
UNAUTHORIZED = Tag("UNAUTHORIZED")
FORBIDDEN = Tag("FORBIDDEN")
CONFLICT = Tag("CONFLICT")
TOO_MANY_REQUESTS = Tag("TOO_MANY_REQUESTS")
VALIDATION_ERROR = Tag("VALIDATION_ERROR")
UNPROCESSABLE_ENTITY = Tag("UNPROCESSABLE_ENTITY")
DATABASE = Tag("DATABASE")
TRANSACTION = Tag("TRANSACTION")
