"""
Menu API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from menu_api.core import (
    configure_cors,
    lifespan,
    register_exception_handlers,
    register_middlewares,
)
from menu_api.routers.admin import router as admin_router
from menu_api.routers.auth import router as auth_router
from menu_api.routers.public import health_router, menu_router
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler


app = FastAPI(
    title="Menu API",
    description="Restaurant and hotel menu management API",
    version="1.0.0",
    lifespan=lifespan,
)

# Error rendering
register_exception_handlers(app)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Security headers and content-type validation
register_middlewares(app)

# Request correlation
app.add_middleware(CorrelationIdMiddleware)

# CORS runs outermost so preflights never hit the limiter
configure_cors(app)


# =============================================================================
# Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(menu_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("menu_api.main:app", host="0.0.0.0", port=settings.rest_api_port)
