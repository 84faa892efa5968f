"""
Exception handlers.

Every error response has the shape ``{"message": str, "error": Any}``;
``error`` is omitted when there is nothing beyond the message.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.logging import menu_api_logger as logger
from shared.config.settings import settings
from shared.utils.schemas import ErrorResponse


VALIDATION_MESSAGE = "The given data was invalid."


def error_body(message: str, error: Any = None) -> dict[str, Any]:
    return ErrorResponse(message=message, error=error).model_dump(exclude_none=True)


def _field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by dotted field path, dropping the body/query prefix."""
    fields: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        key = ".".join(loc) or "body"
        fields.setdefault(key, []).append(str(err.get("msg", "Invalid value")))
    return fields


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), getattr(exc, "error", None)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _field_errors(exc)
    logger.info("Request validation failed", path=request.url.path, fields=list(errors))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(VALIDATION_MESSAGE, errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    detail = f"{type(exc).__name__}: {exc}" if settings.debug else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render the common error shape."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
