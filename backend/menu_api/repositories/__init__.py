"""
Repository layer: data access for the catalog and users.

Router (thin) -> Service (business rules) -> Repository (queries) -> Model
"""

from .base import BaseRepository
from .category import CategoryRepository
from .menu_item import MenuItemRepository, MenuItemFilters
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "MenuItemRepository",
    "MenuItemFilters",
    "UserRepository",
]
