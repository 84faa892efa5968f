"""
SQLAlchemy ORM Models Package.

- base: Base class, TimestampMixin, IdType
- catalog: Category, MenuItem
- user: User
"""

from .base import Base, TimestampMixin, IdType
from .catalog import Category, MenuItem
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "IdType",
    "Category",
    "MenuItem",
    "User",
]
