"""
Service layer: business rules over the repositories.
"""

from .base_service import BaseCRUDService
from .domain import AuthService, CategoryService, MenuItemService

__all__ = [
    "BaseCRUDService",
    "AuthService",
    "CategoryService",
    "MenuItemService",
]
