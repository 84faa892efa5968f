"""
Shared FastAPI dependencies for routers.
"""

from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from menu_api.models import User
from menu_api.services.domain import AuthService, CategoryService, MenuItemService
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import current_token_claims
from shared.utils.exceptions import InsufficientRoleError


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_menu_item_service(db: Session = Depends(get_db)) -> MenuItemService:
    return MenuItemService(db)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def current_user(
    claims: dict[str, Any] = Depends(current_token_claims),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """
    The principal behind the bearer token.

    Usage:
        @router.get("/user")
        def me(user: User = Depends(current_user)):
            ...
    """
    return auth.user_from_claims(claims)


def require_admin(user: User = Depends(current_user)) -> User:
    """Dependency that requires the admin role."""
    if user.role != Roles.ADMIN:
        raise InsufficientRoleError([Roles.ADMIN], user_id=user.id, role=user.role)
    return user
