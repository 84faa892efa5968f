"""
Token blacklist service using Redis.

Provides token revocation for:
- User logout (single token, by jti)
- Password reset (every token issued to the user before the reset)

Entries are stored with a TTL matching the remaining token lifetime, so
Redis cleans them up once the token would have expired anyway.

Checks fail CLOSED: if Redis cannot be reached the token is treated as
revoked and the caller gets a 503.
"""

from datetime import datetime, timezone

import redis

from shared.config.settings import settings
from shared.config.logging import get_logger, mask_jti
from shared.infrastructure.redis_pool import (
    get_redis_client,
    PREFIX_AUTH_BLACKLIST,
    PREFIX_AUTH_USER_REVOKE,
)
from shared.utils.exceptions import ServiceUnavailableError

logger = get_logger(__name__)

BLACKLIST_PREFIX = PREFIX_AUTH_BLACKLIST
USER_REVOKE_PREFIX = PREFIX_AUTH_USER_REVOKE


def blacklist_token(token_jti: str, expires_at: datetime) -> None:
    """
    Add a token to the blacklist until ``expires_at``.

    Raises:
        ServiceUnavailableError: Redis is unreachable, so the token could not be revoked.
    """
    now = datetime.now(timezone.utc)
    ttl_seconds = int((expires_at - now).total_seconds())

    if ttl_seconds <= 0:
        logger.debug("Token already expired, skipping blacklist", jti=mask_jti(token_jti))
        return

    try:
        get_redis_client().setex(f"{BLACKLIST_PREFIX}{token_jti}", ttl_seconds, "1")
    except redis.RedisError as e:
        raise ServiceUnavailableError(
            "Token store", operation="blacklist", jti=mask_jti(token_jti), cause=str(e)
        )

    logger.info("Token blacklisted", jti=mask_jti(token_jti), ttl_seconds=ttl_seconds)


def revoke_all_user_tokens(user_id: int) -> None:
    """
    Revoke every token issued to ``user_id`` up to now.

    Stores the revocation time; any token with an earlier ``iat`` is rejected.
    The entry lives as long as the longest-lived access token.
    """
    now = datetime.now(timezone.utc)
    ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    try:
        get_redis_client().setex(f"{USER_REVOKE_PREFIX}{user_id}", ttl_seconds, repr(now.timestamp()))
    except redis.RedisError as e:
        raise ServiceUnavailableError(
            "Token store", operation="revoke_user", user_id=user_id, cause=str(e)
        )

    logger.info("All tokens revoked for user", user_id=user_id)


def is_token_revoked(token_jti: str, user_id: int, token_iat: float) -> bool:
    """
    Combined check: individual blacklist and user-level revocation.

    Uses a pipeline so both lookups cost a single round-trip.

    Raises:
        ServiceUnavailableError: Redis is unreachable (fail closed).
    """
    try:
        with get_redis_client().pipeline(transaction=False) as pipe:
            pipe.exists(f"{BLACKLIST_PREFIX}{token_jti}")
            pipe.get(f"{USER_REVOKE_PREFIX}{user_id}")
            blacklisted, revoked_at = pipe.execute()
    except redis.RedisError as e:
        raise ServiceUnavailableError(
            "Token store", operation="check", jti=mask_jti(token_jti), cause=str(e)
        )

    if blacklisted:
        return True

    if revoked_at is not None:
        return token_iat < float(revoked_at)

    return False
