"""
Menu Item Repository - Data access for menu items.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import joinedload

from menu_api.models import Category, MenuItem
from .base import BaseRepository


@dataclass
class MenuItemFilters:
    """Optional filters for menu item listings."""

    category_id: int | None = None
    category_name: str | None = None
    available: bool | None = None

    def __post_init__(self):
        if self.category_name is not None:
            self.category_name = self.category_name.strip() or None


class MenuItemRepository(BaseRepository[MenuItem]):
    """
    Repository for MenuItem entities.

    Guarantees eager loading of the category (its group is part of every
    menu item response).
    """

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _base_query(self) -> Select:
        return (
            select(MenuItem)
            .options(joinedload(MenuItem.category))
            .order_by(MenuItem.name, MenuItem.id)
        )

    def find_filtered(self, filters: MenuItemFilters) -> Sequence[MenuItem]:
        query = self._base_query()

        if filters.category_id is not None:
            query = query.where(MenuItem.category_id == filters.category_id)

        if filters.category_name:
            query = query.join(Category, MenuItem.category_id == Category.id).where(
                func.lower(Category.name) == filters.category_name.lower()
            )

        if filters.available is not None:
            query = query.where(MenuItem.available.is_(filters.available))

        return self._db.execute(query).scalars().unique().all()

    def count_by_category(self, category_id: int) -> int:
        """Number of menu items referencing ``category_id``."""
        return self.count(MenuItem.category_id == category_id)
