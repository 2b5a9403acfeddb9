from __future__ import annotations
from http import HTTPStatus
from typing import Optional, Sequence, Union

from core_fault.fault import Fault, FieldError, parse_validation_error
from core_fault import tag as T

__all__ = [
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


def _make(
    message: str,
    code: int,
    tag: T.Tag,
    cause: Optional[BaseException],
    field_errors: Optional[Sequence[FieldError]],
) -> Fault:
    return Fault(message, http_code=code, tag=tag, cause=cause, field_errors=field_errors)


def validation(
    message: str,
    err: Union[BaseException, str, None] = None,
    *,
    cause: Optional[BaseException] = None,
    field_errors: Optional[Sequence[FieldError]] = None,
) -> Fault:
    """
    422 / ``VALIDATION_ERROR`` with field errors parsed from *err*.

    Explicit ``field_errors`` take precedence over the parsed ones.
    Serializes as ``{"status": 422, "message": ..., "fields": [...]}``.
    """
    fields = list(field_errors) if field_errors is not None else parse_validation_error(err)
    return _make(message, HTTPStatus.UNPROCESSABLE_ENTITY, T.VALIDATION_ERROR, cause, fields)


def bad_request(message: str, *, cause: Optional[BaseException] = None,
                field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.BAD_REQUEST, T.BAD_REQUEST, cause, field_errors)


def not_found(message: str, *, cause: Optional[BaseException] = None,
              field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.NOT_FOUND, T.NOT_FOUND, cause, field_errors)


def internal_server_error(message: str, *, cause: Optional[BaseException] = None,
                          field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.INTERNAL_SERVER_ERROR, T.INTERNAL_SERVER_ERROR, cause, field_errors)


def unauthorized(message: str, *, cause: Optional[BaseException] = None,
                 field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.UNAUTHORIZED, T.UNAUTHORIZED, cause, field_errors)


def forbidden(message: str, *, cause: Optional[BaseException] = None,
              field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.FORBIDDEN, T.FORBIDDEN, cause, field_errors)


def conflict(message: str, *, cause: Optional[BaseException] = None,
             field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.CONFLICT, T.CONFLICT, cause, field_errors)


def too_many_requests(message: str, *, cause: Optional[BaseException] = None,
                      field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.TOO_MANY_REQUESTS, T.TOO_MANY_REQUESTS, cause, field_errors)


def unprocessable_entity(message: str, *, cause: Optional[BaseException] = None,
                         field_errors: Optional[Sequence[FieldError]] = None) -> Fault:
    return _make(message, HTTPStatus.UNPROCESSABLE_ENTITY, T.UNPROCESSABLE_ENTITY, cause, field_errors)
