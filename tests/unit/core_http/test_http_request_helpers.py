from typing import Optional

import pytest
from pydantic import BaseModel, Field

import core_fault
from core_http import (
    client_ip_from,
    decode_body,
    read_query_array,
    read_query_array_optional,
    read_query_bool,
    read_query_bool_optional,
    read_query_int,
    read_query_int_optional,
    read_query_string,
    read_query_string_optional,
)
from core_http.sentinel import (
    EmptyRequestBody,
    InvalidJSONField,
    MalformedJSON,
    MultipleJSONValues,
    UnknownRequestBodyKey,
)


class Signup(BaseModel):
    email: str
    display_name: Optional[str] = Field(default=None, alias="displayName")


def test_decode_body_accepts_alias():
    got = decode_body(b'{"email": "a@b.c", "displayName": "A"}', Signup)
    assert got.display_name == "A"


@pytest.mark.parametrize(
    "raw, exc",
    [
        (b"", EmptyRequestBody),
        (b"   \n", EmptyRequestBody),
        (b'{"email": ', MalformedJSON),
        (b'{"email": "a"} {"email": "b"}', MultipleJSONValues),
        (b'{"email": "a", "role": "admin"}', UnknownRequestBodyKey),
        (b'{"email": 5}', InvalidJSONField),
    ],
)
def test_decode_body_rejections(raw, exc):
    with pytest.raises(exc):
        decode_body(raw, Signup)


def test_malformed_offset():
    with pytest.raises(MalformedJSON) as ei:
        decode_body(b'{"email" "a"}', Signup)
    assert ei.value.offset == 9
    assert str(ei.value) == "body contains badly-formed JSON (at character 9)"


def test_missing_required_field_is_validation_fault():
    with pytest.raises(core_fault.Fault) as ei:
        decode_body(b"{}", Signup)
    assert ei.value.tag == core_fault.VALIDATION_ERROR
    assert [f.field for f in ei.value.field_errors] == ["email"]


def test_query_int():
    qs = {"page": "3", "neg": "-2", "bad": "3.5", "empty": ""}
    assert read_query_int(qs, "page") == 3
    assert read_query_int(qs, "neg") == -2
    assert read_query_int(qs, "bad") == 0
    assert read_query_int(qs, "missing") == 0
    assert read_query_int_optional(qs, "bad") is None
    assert read_query_int_optional(qs, "empty") is None


def test_query_bool():
    qs = {"a": "true", "b": "0", "c": "yes", "d": "T"}
    assert read_query_bool(qs, "a") is True
    assert read_query_bool(qs, "b") is False
    assert read_query_bool(qs, "c") is False
    assert read_query_bool(qs, "d") is True
    assert read_query_bool_optional(qs, "c") is None
    assert read_query_bool_optional(qs, "b") is False


def test_query_string_and_array():
    qs = {"sort": "asc", "tags": "user, admin ,guest"}
    assert read_query_string(qs, "sort") == "asc"
    assert read_query_string(qs, "missing") == ""
    assert read_query_string_optional(qs, "missing") is None
    assert read_query_array(qs, "tags") == ["user", "admin", "guest"]
    assert read_query_array(qs, "missing") == []
    assert read_query_array_optional(qs, "missing") is None


def test_client_ip_precedence():
    assert client_ip_from({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "1.1.1.1"}, "9.9.9.9") == "203.0.113.7"
    assert client_ip_from({"X-Real-IP": " 198.51.100.2 "}, "9.9.9.9") == "198.51.100.2"
    assert client_ip_from({}, "192.0.2.1:5555") == "192.0.2.1"
    assert client_ip_from({}, "[2001:db8::1]:443") == "2001:db8::1"
    assert client_ip_from({}, "2001:db8::1") == "2001:db8::1"
    assert client_ip_from({}, "192.0.2.1") == "192.0.2.1"


class Address(BaseModel):
    city: str


class Profile(BaseModel):
    email: str
    home: Optional[Address] = None
    previous: list[Address] = []
    labels: dict[str, str] = {}


def test_unknown_keys_rejected_in_nested_models():
    with pytest.raises(UnknownRequestBodyKey) as ei:
        decode_body(b'{"email": "a", "home": {"city": "Oslo", "zip": "0150"}}', Profile)
    assert ei.value.key == "home.zip"
    with pytest.raises(UnknownRequestBodyKey) as ei:
        decode_body(b'{"email": "a", "previous": [{"city": "Rome"}, {"town": "Bari"}]}', Profile)
    assert ei.value.key == "previous.1.town"


def test_nested_models_and_free_form_maps_decode():
    got = decode_body(
        b'{"email": "a", "home": {"city": "Oslo"}, "previous": [{"city": "Rome"}], "labels": {"any": "x"}}',
        Profile,
    )
    assert got.home == Address(city="Oslo")
    assert got.labels == {"any": "x"}
