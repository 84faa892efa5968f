"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from menu_api.models import Base
from shared.config.logging import menu_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine
from shared.infrastructure.redis_pool import close_redis_client


def check_production_config() -> None:
    """
    Log insecure settings; refuse to start with them in production.

    Raises:
        RuntimeError: Production environment with weak secrets or debug on.
    """
    secret_errors = settings.validate_production_secrets()
    if not secret_errors:
        return
    for error in secret_errors:
        logger.error("Configuration error: %s", error)
    if settings.environment == "production":
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(secret_errors)}. "
            "Server will not start with insecure configuration."
        )
    logger.warning("Running with insecure defaults (acceptable for development only)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()
    check_production_config()

    logger.info("Starting menu API", port=settings.rest_api_port, env=settings.environment)

    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down menu API")
    close_redis_client()
    logger.info("Redis client closed")
