"""
Shared building blocks for the menu API.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, MenuGroup, tag vocabulary, seed category structure

- shared.infrastructure: Database, Redis and request context
  - db.py: SQLAlchemy engine and sessions, safe_commit()
  - redis_pool.py: Shared Redis client
  - correlation.py: X-Request-ID propagation

- shared.security: Authentication and abuse protection
  - auth.py: JWT signing and verification, bearer token dependency
  - password.py: Bcrypt hashing
  - token_blacklist.py: Redis-based token revocation
  - rate_limit.py: slowapi limiter

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input normalization helpers
  - schemas.py / admin_schemas.py: Pydantic request and response models
  - health.py: Dependency health checks

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, MenuGroup
    from shared.utils.exceptions import NotFoundError, ConflictError
"""
