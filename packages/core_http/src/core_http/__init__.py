from .errors import (
    UNEXPECTED_ERROR_MESSAGE,
    attach_fault_handlers,
    fault_response,
    field_errors_from_pydantic,
    to_fault,
)
from .request import (
    decode_body,
    read_request_body,
    validated_body,
    read_query_string,
    read_query_string_optional,
    read_query_int,
    read_query_int_optional,
    read_query_bool,
    read_query_bool_optional,
    read_query_array,
    read_query_array_optional,
    client_ip_from,
    get_client_ip,
)
from .response import write_json, write_success
from .sentinel import (
    RequestBodyError,
    EmptyRequestBody,
    UnknownRequestBodyKey,
    InvalidJSONField,
    MalformedJSON,
    MultipleJSONValues,
    BodyTooLarge,
)

__all__ = [
    "UNEXPECTED_ERROR_MESSAGE",
    "attach_fault_handlers",
    "fault_response",
    "field_errors_from_pydantic",
    "to_fault",
    "decode_body",
    "read_request_body",
    "validated_body",
    "read_query_string",
    "read_query_string_optional",
    "read_query_int",
    "read_query_int_optional",
    "read_query_bool",
    "read_query_bool_optional",
    "read_query_array",
    "read_query_array_optional",
    "client_ip_from",
    "get_client_ip",
    "write_json",
    "write_success",
    "RequestBodyError",
    "EmptyRequestBody",
    "UnknownRequestBodyKey",
    "InvalidJSONField",
    "MalformedJSON",
    "MultipleJSONValues",
    "BodyTooLarge",
]
