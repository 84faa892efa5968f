"""
Redis connection management (sync client, used by the token blacklist).

The pool is created lazily on first use so that importing the application
never requires a running Redis server.
"""

from __future__ import annotations

import threading

import redis

from shared.config.settings import settings, REDIS_URL
from shared.config.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Key Prefixes
# =============================================================================

PREFIX_AUTH_BLACKLIST = "auth:token:blacklist:"
PREFIX_AUTH_USER_REVOKE = "auth:user:revoked:"


# =============================================================================
# Sync Redis Client
# =============================================================================

_redis_client: redis.Redis | None = None
_client_lock = threading.Lock()


def get_redis_client() -> redis.Redis:
    """
    Get the shared Redis client, creating its connection pool on first use.

    Responses are decoded to ``str``.
    """
    global _redis_client
    if _redis_client is None:
        with _client_lock:
            if _redis_client is None:
                _redis_client = redis.Redis.from_url(
                    REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=settings.redis_socket_timeout,
                    socket_timeout=settings.redis_socket_timeout,
                    health_check_interval=30,
                )
                logger.info("Redis client initialized", timeout=settings.redis_socket_timeout)
    return _redis_client


def close_redis_client() -> None:
    """Close the Redis connection pool on application shutdown."""
    global _redis_client
    with _client_lock:
        if _redis_client is not None:
            try:
                _redis_client.close()
                logger.info("Redis client closed")
            except redis.RedisError as e:
                logger.warning("Error closing Redis client", error=str(e))
            finally:
                _redis_client = None


def ping_redis() -> bool:
    """Return True if Redis answers PING."""
    try:
        return bool(get_redis_client().ping())
    except redis.RedisError as e:
        logger.warning("Redis ping failed", error=str(e))
        return False
