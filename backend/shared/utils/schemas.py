"""
Shared Pydantic schemas: authentication and common responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from shared.config.constants import Limits
from shared.utils.validators import clean_name, validate_password_bytes


# =============================================================================
# Common
# =============================================================================


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
    error: Any | None = None


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Authentication Schemas
# =============================================================================


def _passwords_match(password: str, confirmation: str | None) -> None:
    if confirmation is not None and confirmation != password:
        raise ValueError("The password confirmation does not match.")


class RegisterRequest(BaseModel):
    """Registration body. ``password_confirmation`` is checked when sent."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    username: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(
        min_length=Limits.PASSWORD_MIN_LENGTH, max_length=Limits.PASSWORD_MAX_LENGTH
    )
    password_confirmation: str | None = None

    @field_validator("name", "username")
    @classmethod
    def _strip(cls, value: str) -> str:
        return clean_name(value)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        return validate_password_bytes(value)

    @model_validator(mode="after")
    def _check_confirmation(self) -> "RegisterRequest":
        _passwords_match(self.password, self.password_confirmation)
        return self


class LoginRequest(BaseModel):
    """Login request body."""

    model_config = {"extra": "forbid"}

    username: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    # No bcrypt byte check: an over-long password is just a wrong password
    password: str = Field(min_length=1, max_length=Limits.PASSWORD_MAX_LENGTH)


class ResetPasswordRequest(BaseModel):
    """
    Password reset body.

    The caller proves who they are with ``current_password`` (their own);
    ``username`` names the account whose password changes.
    """

    model_config = {"extra": "forbid"}

    username: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    current_password: str = Field(min_length=1, max_length=Limits.PASSWORD_MAX_LENGTH)
    password: str = Field(
        min_length=Limits.PASSWORD_MIN_LENGTH, max_length=Limits.PASSWORD_MAX_LENGTH
    )
    password_confirmation: str | None = None

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        return validate_password_bytes(value)

    @model_validator(mode="after")
    def _check_confirmation(self) -> "ResetPasswordRequest":
        _passwords_match(self.password, self.password_confirmation)
        return self


class UserInfo(BaseModel):
    """Public view of a principal (never includes the password hash)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    username: str
    email: str
    role: str
    last_login_at: datetime | None = None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Register/login response with the bearer token."""

    message: str
    token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
