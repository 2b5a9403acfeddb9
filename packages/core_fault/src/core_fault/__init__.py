"""
core_fault – tagged HTTP errors.

    raise core_fault.not_found("user not found")
    raise core_fault.new("payment failed", http_code=409, tag=core_fault.CONFLICT) from exc
    raise core_fault.validation("invalid body", "email: is required; name: is required.")

    if core_fault.get_tag(err) == core_fault.NOT_FOUND:
        ...
"""
from .tag import (
    Tag,
    UNTAGGED,
    BAD_REQUEST,
    NOT_FOUND,
    INTERNAL_SERVER_ERROR,
    UNAUTHORIZED,
    FORBIDDEN,
    CONFLICT,
    TOO_MANY_REQUESTS,
    VALIDATION_ERROR,
    UNPROCESSABLE_ENTITY,
    DATABASE,
    TRANSACTION,
)
from .fault import (
    FieldError,
    FaultBody,
    Fault,
    new,
    parse_validation_error,
    iter_chain,
    find_fault,
    get_tag,
    matches,
)
from .instances import (
    validation,
    bad_request,
    not_found,
    internal_server_error,
    unauthorized,
    forbidden,
    conflict,
    too_many_requests,
    unprocessable_entity,
)

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
    "FieldError",
    "FaultBody",
    "Fault",
    "new",
    "parse_validation_error",
    "iter_chain",
    "find_fault",
    "get_tag",
    "matches",
    "validation",
    "bad_request",
    "not_found",
    "internal_server_error",
    "unauthorized",
    "forbidden",
    "conflict",
    "too_many_requests",
    "unprocessable_entity",
]
