"""
Health Check Utilities.

Usage:
    from shared.utils.health import run_health_check

    result = run_health_check("redis", ping_redis)
    # HealthCheckResult(status=HEALTHY, component="redis", latency_ms=0.8)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from shared.config.logging import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class HealthCheckResult:
    """Result of a single dependency check."""
    status: HealthStatus
    component: str
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {"status": self.status.value}
        if self.latency_ms is not None:
            result["latency_ms"] = round(self.latency_ms, 2)
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


def run_health_check(component: str, check: Callable[[], Any]) -> HealthCheckResult:
    """
    Run ``check`` and time it.

    The check fails if it raises or returns False; a dict return value is
    reported as details.
    """
    start_time = time.perf_counter()
    try:
        outcome = check()
    except Exception as e:  # any dependency failure means "unhealthy", never a 500
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.warning("Health check failed", component=component, error=str(e))
        return HealthCheckResult(
            status=HealthStatus.UNHEALTHY,
            component=component,
            latency_ms=latency_ms,
            error=type(e).__name__,
        )

    latency_ms = (time.perf_counter() - start_time) * 1000
    if outcome is False:
        return HealthCheckResult(
            status=HealthStatus.UNHEALTHY,
            component=component,
            latency_ms=latency_ms,
            error="check returned false",
        )

    return HealthCheckResult(
        status=HealthStatus.HEALTHY,
        component=component,
        latency_ms=latency_ms,
        details=outcome if isinstance(outcome, dict) else {},
    )
