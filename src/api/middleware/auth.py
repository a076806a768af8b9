"""Verification of Supabase session tokens."""

import json
from enum import Enum
from functools import lru_cache
from typing import Any

import jwt
from jwt import PyJWK

from src.core.config import get_settings
from src.schemas.auth import TokenPayload

# Supabase asymmetric signing keys are P-256
SESSION_TOKEN_ALGORITHMS = ["ES256"]
REQUIRED_CLAIMS = ["exp", "iat", "sub"]


class AuthErrorCode(str, Enum):
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"


class AuthError(Exception):
    """A session token could not be accepted."""

    def __init__(self, message: str, code: AuthErrorCode) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


@lru_cache
def get_signing_key() -> Any:
    """Public key of the project's signing JWK, parsed once per process."""
    jwk_json = get_settings().supabase_signing_key_jwk

    if not jwk_json:
        raise AuthError("Signing key not configured", AuthErrorCode.INVALID_TOKEN)

    try:
        jwk_data = json.loads(jwk_json)
    except json.JSONDecodeError as e:
        raise AuthError(f"Invalid signing key JWK format: {e}", AuthErrorCode.INVALID_TOKEN) from e

    return PyJWK.from_dict(jwk_data).key


def decode_jwt(token: str) -> TokenPayload:
    """Verify a session token and return its claims.

    The token must be signed by the project key, unexpired, addressed to the
    configured audience and carry a subject.

    Raises:
        AuthError: TOKEN_EXPIRED, INVALID_SIGNATURE or INVALID_TOKEN.
    """
    public_key = get_signing_key()

    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            public_key,
            algorithms=SESSION_TOKEN_ALGORITHMS,
            audience=get_settings().jwt_audience,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired", AuthErrorCode.TOKEN_EXPIRED) from e
    except jwt.InvalidSignatureError as e:
        raise AuthError("Invalid token signature", AuthErrorCode.INVALID_SIGNATURE) from e
    except jwt.InvalidAudienceError as e:
        raise AuthError("Token audience not accepted", AuthErrorCode.INVALID_TOKEN) from e
    except jwt.MissingRequiredClaimError as e:
        raise AuthError(f"Token missing required claim: {e.claim}", AuthErrorCode.INVALID_TOKEN) from e
    except jwt.InvalidTokenError as e:
        raise AuthError(f"Invalid token: {e}", AuthErrorCode.INVALID_TOKEN) from e

    return TokenPayload.model_validate(payload)
