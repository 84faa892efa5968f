"""
Infrastructure module: Database, Redis, request correlation.

Provides:
- Database sessions and transactions (db.py)
- Redis client for token revocation (redis_pool.py)
- Correlation IDs for logs (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)
from shared.infrastructure.redis_pool import (
    get_redis_client,
    close_redis_client,
    ping_redis,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    # redis
    "get_redis_client",
    "close_redis_client",
    "ping_redis",
]
