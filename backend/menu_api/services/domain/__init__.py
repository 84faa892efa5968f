"""
Domain services.

Usage:
    from menu_api.services.domain import CategoryService, MenuItemService, AuthService
"""

from .auth_service import AuthService
from .category_service import CategoryService
from .menu_item_service import MenuItemService

__all__ = [
    "AuthService",
    "CategoryService",
    "MenuItemService",
]
