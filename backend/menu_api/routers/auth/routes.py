"""
Authentication router.
Handles registration, login, current principal, logout and password reset.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from menu_api.models import User
from menu_api.routers.dependencies import current_user, get_auth_service
from menu_api.services.domain import AuthService
from shared.config.settings import settings
from shared.security.auth import current_token_claims
from shared.security.rate_limit import limiter
from shared.utils.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserInfo,
)


router = APIRouter(prefix="/api/admin", tags=["auth"])


def _auth_response(message: str, token: str, user: User, auth: AuthService) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=token,
        expires_in=auth.token_ttl_seconds,
        user=UserInfo.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create a dashboard account and return its first token."""
    token, user = auth.register(
        name=body.name,
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return _auth_response("User registered successfully", token, user, auth)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit)
def login(
    request: Request,
    body: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Exchange username and password for a bearer token.

    Unknown username and wrong password both answer 401 "Invalid credentials".
    """
    token, user = auth.login(body.username, body.password)
    return _auth_response("Login successful", token, user, auth)


@router.get("/user", response_model=UserInfo)
def get_user(user: User = Depends(current_user)) -> UserInfo:
    """The authenticated principal."""
    return UserInfo.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    claims: dict[str, Any] = Depends(current_token_claims),
    user: User = Depends(current_user),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the presented token."""
    auth.logout(claims)
    return MessageResponse(message="Successfully logged out")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    user: User = Depends(current_user),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Change a password. Requires the caller's current password.

    All tokens previously issued to the account are revoked, including the
    caller's own when resetting their own password.
    """
    auth.reset_password(
        caller=user,
        username=body.username,
        current_password=body.current_password,
        new_password=body.password,
    )
    return MessageResponse(message="Password reset successfully")
