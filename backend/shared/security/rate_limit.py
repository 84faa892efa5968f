"""
Rate limiting using slowapi, keyed by client IP.

Every route gets RATE_LIMIT_DEFAULT through SlowAPIMiddleware; routes that
need a stricter budget use the decorator:

    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)


def _retry_after_seconds(exc: RateLimitExceeded) -> int:
    try:
        return int(exc.limit.limit.get_expiry())
    except AttributeError:
        return 60


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render 429 responses in the API's ``{message, error}`` shape.
    """
    retry_after = _retry_after_seconds(exc)
    logger.warning(
        "Rate limit exceeded",
        client=get_remote_address(request),
        path=request.url.path,
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"message": "Too many requests", "error": str(exc.detail)},
        headers={"Retry-After": str(retry_after)},
    )
