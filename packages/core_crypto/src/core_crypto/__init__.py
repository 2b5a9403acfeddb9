from .password import encode_password, check_password
from .token import ALGORITHM, TokenError, TokenClaims, generate_token, verify_token
from .otp import gen_numeric_code, hash_otp, equal_hash_otp

__all__ = [
    "encode_password",
    "check_password",
    "ALGORITHM",
    "TokenError",
    "TokenClaims",
    "generate_token",
    "verify_token",
    "gen_numeric_code",
    "hash_otp",
    "equal_hash_otp",
]
