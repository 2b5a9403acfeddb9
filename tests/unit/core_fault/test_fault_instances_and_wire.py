import pytest

import core_fault
from core_fault import Fault, FieldError


@pytest.mark.parametrize(
    "ctor, code, tag",
    [
        (core_fault.bad_request, 400, core_fault.BAD_REQUEST),
        (core_fault.not_found, 404, core_fault.NOT_FOUND),
        (core_fault.internal_server_error, 500, core_fault.INTERNAL_SERVER_ERROR),
        (core_fault.unauthorized, 401, core_fault.UNAUTHORIZED),
        (core_fault.forbidden, 403, core_fault.FORBIDDEN),
        (core_fault.conflict, 409, core_fault.CONFLICT),
        (core_fault.too_many_requests, 429, core_fault.TOO_MANY_REQUESTS),
        (core_fault.unprocessable_entity, 422, core_fault.UNPROCESSABLE_ENTITY),
    ],
)
def test_convenience_constructors(ctor, code, tag):
    cause = RuntimeError("c")
    f = ctor("msg", cause=cause)
    assert f.http_code == code
    assert f.tag == tag
    assert f.cause is cause


def test_validation_parses_error_text():
    f = core_fault.validation("invalid body", "email: is required.")
    assert f.http_code == 422
    assert f.tag == core_fault.VALIDATION_ERROR
    assert f.to_dict() == {
        "status": 422,
        "message": "invalid body",
        "fields": [{"field": "email", "message": "is required"}],
    }


def test_validation_explicit_fields_win():
    f = core_fault.validation("bad", "a: b", field_errors=[FieldError(field="x", message="y")])
    assert [e.field for e in f.field_errors] == ["x"]


def test_wire_form_restores_status_message_fields():
    f = core_fault.validation("invalid body", "email: is required; age: too low")
    restored = Fault.from_dict(f.to_dict())
    assert restored.http_code == 422
    assert restored.message == "invalid body"
    assert restored.field_errors == f.field_errors
    # tag and cause are internal
    assert restored.tag == core_fault.UNTAGGED


def test_wire_form_has_no_tag_or_cause():
    f = core_fault.not_found("gone", cause=RuntimeError("secret"))
    assert f.to_dict() == {"status": 404, "message": "gone", "fields": []}
