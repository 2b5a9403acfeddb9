"""
HS256 session tokens.

    token, claims = generate_token(secret, user_id, session_id, org_id, timedelta(hours=1))
    claims = verify_token(secret, token)   # raises TokenError

Claims carry ``userId``, ``orgId`` (may be null), ``sessionId`` and the
registered ``jti``/``iss``/``iat``/``exp``.
"""
from __future__ import annotations
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core_config.constants import JWT_ISSUER, JWT_SECRET_KEY_LENGTH
from core_utils import uid

ALGORITHM = "HS256"
_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]

class TokenError(ValueError):
    """Token could not be issued or verified."""

class TokenClaims(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(alias="userId")
    org_id: Optional[str] = Field(default=None, alias="orgId")
    session_id: str = Field(alias="sessionId")
    jti: str
    iss: str
    iat: int
    exp: int

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

def _seconds(duration: Union[timedelta, int, float]) -> int:
    if isinstance(duration, timedelta):
        return int(duration.total_seconds())
    return int(duration)

def generate_token(
    secret_key: str,
    user_id: str,
    session_id: str,
    org_id: Optional[str],
    duration: Union[timedelta, int, float],
    *,
    issuer: str = JWT_ISSUER,
) -> tuple[str, TokenClaims]:
    if len(secret_key or "") != JWT_SECRET_KEY_LENGTH:
        raise TokenError("invalid secret key length")
    now = int(time.time())
    claims = TokenClaims(
        user_id=user_id,
        org_id=org_id,
        session_id=session_id,
        jti=uid.new("tok"),
        iss=issuer,
        iat=now,
        exp=now + _seconds(duration),
    )
    try:
        token = jwt.encode(claims.model_dump(by_alias=True), secret_key, algorithm=ALGORITHM)
    except JWTError as e:
        raise TokenError(f"token signing failed: {e}") from e
    return token, claims

def verify_token(secret_key: str, token: str) -> TokenClaims:
    """
    Verify signature and expiry of *token*.

    Only HMAC algorithms are accepted; a token signed with anything else is
    rejected before the key is consulted.
    """
    if not (token or "").strip():
        raise TokenError("token is empty")
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise TokenError(f"token parsing failed: {e}") from e
    if header.get("alg") not in _HMAC_ALGORITHMS:
        raise TokenError("invalid signing method")
    try:
        payload = jwt.decode(token, secret_key, algorithms=_HMAC_ALGORITHMS)
    except ExpiredSignatureError as e:
        raise TokenError("token expired") from e
    except JWTError as e:
        raise TokenError(f"token parsing failed: {e}") from e
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise TokenError("invalid claims") from e

__all__ = ["ALGORITHM", "TokenError", "TokenClaims", "generate_token", "verify_token"]
