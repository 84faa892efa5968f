"""
Security module: JWT authentication, password hashing, token revocation, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    verify_jwt,
    get_bearer_token,
    current_token_claims,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.token_blacklist import (
    blacklist_token,
    is_token_revoked,
    revoke_all_user_tokens,
)
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "sign_jwt",
    "verify_jwt",
    "get_bearer_token",
    "current_token_claims",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # token_blacklist
    "blacklist_token",
    "is_token_revoked",
    "revoke_all_user_tokens",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
