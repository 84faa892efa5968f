"""
Utilities module: Exceptions, validators, schemas, health checks.
"""

from shared.utils.exceptions import (
    AppException,
    AuthenticationError,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    DuplicateEntityError,
)
from shared.utils.validators import (
    validate_image_url,
    clean_name,
    normalize_tags,
)
from shared.utils.schemas import ErrorResponse, MessageResponse

__all__ = [
    # exceptions
    "AppException",
    "AuthenticationError",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "DuplicateEntityError",
    # validators
    "validate_image_url",
    "clean_name",
    "normalize_tags",
    # schemas
    "ErrorResponse",
    "MessageResponse",
]
