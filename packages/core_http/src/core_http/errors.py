from __future__ import annotations
import logging
from http import HTTPStatus
from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

import core_fault
from core_logging import log_stage
from core_http.sentinel import (
    RequestBodyError,
    EmptyRequestBody,
    UnknownRequestBodyKey,
    InvalidJSONField,
)

UNEXPECTED_ERROR_MESSAGE = "an unexpected error occurred"

def field_errors_from_pydantic(errors: Iterable[dict[str, Any]]) -> list[core_fault.FieldError]:
    """Project pydantic/FastAPI error dicts onto ``{field, message}`` pairs.

    The location prefix FastAPI adds (``body``/``query``/...) is dropped.
    """
    out: list[core_fault.FieldError] = []
    for e in errors:
        loc = [str(p) for p in (e.get("loc") or ())]
        if loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = ".".join(loc) or "general"
        out.append(core_fault.FieldError(field=field, message=str(e.get("msg") or "invalid value")))
    return out

def to_fault(err: BaseException) -> core_fault.Fault:
    """
    The Fault to show a client for *err*.

    A Fault anywhere in the chain is used as-is; request-body failures become
    400s; anything else is masked as a generic 500 so internal error text
    never reaches the client.
    """
    f = core_fault.find_fault(err)
    if f is not None:
        return f
    if isinstance(err, EmptyRequestBody):
        return core_fault.bad_request("request body cannot be empty", cause=err)
    if isinstance(err, UnknownRequestBodyKey):
        return core_fault.bad_request("request body contains unknown field", cause=err)
    if isinstance(err, InvalidJSONField):
        return core_fault.bad_request("request body contains incorrect JSON field type", cause=err)
    if isinstance(err, RequestBodyError):
        return core_fault.bad_request(str(err), cause=err)
    return core_fault.internal_server_error(UNEXPECTED_ERROR_MESSAGE)

def fault_response(err: BaseException) -> JSONResponse:
    """JSON response ``{"status", "message", "fields"}`` for *err*."""
    f = to_fault(err)
    return JSONResponse(status_code=f.get_http_code(), content=f.to_dict())

def attach_fault_handlers(app: FastAPI, *, logger: logging.Logger) -> None:
    """
    Uniform error shaping:
      - Fault: its own status and wire body
      - request body errors: 400
      - FastAPI request validation: 422 validation Fault with field errors
      - anything else: logged, masked as a generic 500
    """

    @app.exception_handler(core_fault.Fault)
    async def _fault_handler(request: Request, exc: core_fault.Fault):
        level = logging.ERROR if exc.get_http_code() >= HTTPStatus.INTERNAL_SERVER_ERROR else logging.INFO
        log_stage(logger, "http", "request.fault", level=level,
                  status_code=exc.get_http_code(), tag=str(exc.tag),
                  path=request.url.path, method=request.method,
                  error=str(exc))
        return fault_response(exc)

    @app.exception_handler(RequestBodyError)
    async def _body_handler(request: Request, exc: RequestBodyError):
        log_stage(logger, "http", "request.body_rejected",
                  path=request.url.path, method=request.method,
                  error=str(exc), error_type=exc.__class__.__name__)
        return fault_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        f = core_fault.validation("invalid body", field_errors=field_errors_from_pydantic(exc.errors()))
        log_stage(logger, "validation", "failed",
                  path=request.url.path, method=request.method,
                  fields=[fe.field for fe in f.field_errors])
        return fault_response(f)

    @app.exception_handler(Exception)
    async def _unhandled_handler(request: Request, exc: Exception):
        log_stage(logger, "http", "request.unhandled_exception", level=logging.ERROR,
                  path=request.url.path, method=request.method,
                  error=str(exc), error_type=exc.__class__.__name__)
        return fault_response(exc)

__all__ = [
    "UNEXPECTED_ERROR_MESSAGE",
    "field_errors_from_pydantic",
    "to_fault",
    "fault_response",
    "attach_fault_handlers",
]
