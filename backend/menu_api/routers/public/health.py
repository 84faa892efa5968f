"""
Health check endpoints.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal
from shared.infrastructure.redis_pool import ping_redis
from shared.security.rate_limit import limiter
from shared.utils.health import HealthStatus, run_health_check
from shared.utils.schemas import HealthResponse


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
@limiter.exempt
def health_check() -> HealthResponse:
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY.value,
        service="menu-api",
        environment=settings.environment,
    )


def check_database() -> dict:
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    return {"type": "sql"}


@router.get("/health/detailed")
@limiter.exempt
def detailed_health_check():
    """
    Detailed health check that verifies connectivity to the database and Redis.

    Returns 503 Service Unavailable if any dependency is down.
    """
    results = [
        run_health_check("database", check_database),
        run_health_check("redis", ping_redis),
    ]

    all_healthy = all(r.status == HealthStatus.HEALTHY for r in results)
    checks = {
        "service": "menu-api",
        "environment": settings.environment,
        "status": HealthStatus.HEALTHY.value if all_healthy else HealthStatus.DEGRADED.value,
        "dependencies": {r.component: r.to_dict() for r in results},
    }

    if not all_healthy:
        return JSONResponse(content=checks, status_code=503)

    return checks
