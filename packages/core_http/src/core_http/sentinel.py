"""Request-body failures raised by :func:`core_http.request.read_request_body`.

Each carries a client-safe message; the error boundary maps them to 400.
"""

class RequestBodyError(ValueError):
    """Base class for malformed request bodies."""

class EmptyRequestBody(RequestBodyError):
    def __init__(self, message: str = "body cannot be empty"):
        super().__init__(message)

class UnknownRequestBodyKey(RequestBodyError):
    def __init__(self, key: str = ""):
        self.key = key
        super().__init__(f'request body contains unknown key "{key}"' if key else "request body contains unknown key")

class InvalidJSONField(RequestBodyError):
    def __init__(self, field: str = ""):
        self.field = field
        super().__init__("body contains incorrect JSON field type")

class MalformedJSON(RequestBodyError):
    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"body contains badly-formed JSON (at character {offset})")

class MultipleJSONValues(RequestBodyError):
    def __init__(self) -> None:
        super().__init__("body must only contain a single JSON value")

class BodyTooLarge(RequestBodyError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"body must not be larger than {limit} bytes")

__all__ = [
    "RequestBodyError",
    "EmptyRequestBody",
    "UnknownRequestBodyKey",
    "InvalidJSONField",
    "MalformedJSON",
    "MultipleJSONValues",
    "BodyTooLarge",
]
