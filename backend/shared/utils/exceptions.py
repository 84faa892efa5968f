"""
Centralized HTTP exceptions for consistent error handling.

Every exception logs itself when raised and is rendered by the handlers in
menu_api.core.errors as ``{"message": ..., "error": ...}``.

Usage:
    from shared.utils.exceptions import NotFoundError, ConflictError, ValidationError

    raise NotFoundError("Category", category_id)
    raise ConflictError("Category name already exists", name=name)
    raise ValidationError("Category does not exist", field="category_id")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    ``error`` is an optional machine-readable payload returned next to the
    human-readable message.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        error: Any = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error = error


# =============================================================================
# 401 Unauthorized Errors
# =============================================================================


class AuthenticationError(AppException):
    """
    Bad credentials or bad/expired token (401).

    The message stays generic; the specific reason goes to the log only.

    Usage:
        raise AuthenticationError("Invalid credentials", reason="unknown_user")
    """

    def __init__(self, detail: str = "Invalid or expired token", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Menu item", 123)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("reset another user's password", user_id=user_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """User doesn't have the required role."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


# =============================================================================
# 422 Validation Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (422).

    Usage:
        raise ValidationError("Price must be zero or greater", field="price_room")
    """

    def __init__(self, detail: str, field: str | None = None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            log_level="warning",
            error={field: [detail]} if field else None,
            field=field,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Category is still referenced by menu items")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class DuplicateEntityError(ConflictError):
    """Entity with the same unique value already exists."""

    def __init__(self, entity: str, field: str, value: str | None = None, **log_context: Any):
        detail = f"{entity} with this {field} already exists"
        super().__init__(detail, entity=entity, field=field, value=value, **log_context)
        self.error = {field: [f"The {field} has already been taken."]}


# =============================================================================
# 500 / 503 Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to hash password", user_id=123)
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error during {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)


class ServiceUnavailableError(AppException):
    """A backing service (Redis) is unreachable (503)."""

    def __init__(self, service: str, retry_after: int | None = None, **log_context: Any):
        headers = {"Retry-After": str(retry_after)} if retry_after else None
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{service} temporarily unavailable",
            log_level="error",
            headers=headers,
            service=service,
            **log_context,
        )
