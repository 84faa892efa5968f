"""
Authentication utilities: JWT signing/verification and bearer extraction.

Every token carries a unique "jti" so it can be revoked individually
(logout), and a fractional "iat" so that user-level revocation (password
reset) separates tokens issued in the same second.

All verification failures surface as the same 401 "Invalid or expired
token"; the specific reason is only logged.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.logging import get_logger, mask_jti
from shared.utils.exceptions import AuthenticationError

logger = get_logger(__name__)

REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss", "aud", "jti"]


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign an access token with the given payload.

    Args:
        payload: Claims to include (sub, username, role).
        ttl_seconds: Token lifetime in seconds. Defaults to
            JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = time.time()
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": int(now) + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str, check_blacklist: bool = True) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Checks signature, issuer, audience, expiry, required claims and (unless
    ``check_blacklist`` is False) the Redis blacklist.

    Raises:
        AuthenticationError: Token is malformed, expired, or revoked.
        ServiceUnavailableError: The blacklist could not be consulted.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(reason="expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(reason="malformed", cause=str(e))

    if payload.get("type") != "access":
        raise AuthenticationError(reason="wrong_type", token_type=payload.get("type"))

    try:
        user_id = int(payload["sub"])
    except (ValueError, TypeError):
        raise AuthenticationError(reason="malformed_subject")

    if check_blacklist:
        _check_token_blacklist(payload["jti"], user_id, float(payload["iat"]))

    return payload


def _check_token_blacklist(jti: str, user_id: int, iat: float) -> None:
    from shared.security.token_blacklist import is_token_revoked

    if is_token_revoked(jti, user_id, iat):
        raise AuthenticationError(reason="revoked", jti=mask_jti(jti), user_id=user_id)


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header", reason="missing_header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError(
            "Invalid Authorization header format. Expected: Bearer <token>",
            reason="bad_header",
        )
    return token


def current_token_claims(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency returning the verified claims of the bearer token.

    The raw token is kept under ``"token"`` for logout.
    """
    token = get_bearer_token(authorization)
    claims = verify_jwt(token)
    claims["token"] = token
    return claims
