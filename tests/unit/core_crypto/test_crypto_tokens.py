from datetime import timedelta

import pytest
from jose import jwt

from core_crypto import TokenError, generate_token, verify_token
from core_utils import uid

SECRET = "s" * 32


def test_roundtrip_claims():
    token, claims = generate_token(SECRET, "usr_1", "ses_1", "org_1", timedelta(minutes=5))
    got = verify_token(SECRET, token)
    assert got == claims
    assert got.user_id == "usr_1"
    assert got.org_id == "org_1"
    assert got.iss == "token-service"
    assert got.exp - got.iat == 300
    assert got.jti.startswith("tok_") and uid.is_valid(got.jti)


def test_payload_uses_camel_case_names():
    token, _ = generate_token(SECRET, "u", "s", None, 60)
    payload = jwt.get_unverified_claims(token)
    assert {"userId", "orgId", "sessionId", "jti", "iss", "iat", "exp"} <= set(payload)
    assert payload["orgId"] is None


def test_secret_must_be_exactly_32_chars():
    with pytest.raises(TokenError):
        generate_token("short", "u", "s", None, 60)
    with pytest.raises(TokenError):
        generate_token("x" * 33, "u", "s", None, 60)


def test_empty_token():
    with pytest.raises(TokenError):
        verify_token(SECRET, "  ")


def test_wrong_key():
    token, _ = generate_token(SECRET, "u", "s", None, 60)
    with pytest.raises(TokenError):
        verify_token("k" * 32, token)


def test_expired():
    token, _ = generate_token(SECRET, "u", "s", None, -10)
    with pytest.raises(TokenError):
        verify_token(SECRET, token)


def test_garbage():
    with pytest.raises(TokenError):
        verify_token(SECRET, "not.a.jwt")
