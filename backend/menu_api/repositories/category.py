"""
Category Repository - Data access for menu categories.
"""

from sqlalchemy import Select, case, func, select

from shared.config.constants import MenuGroup
from menu_api.models import Category
from .base import BaseRepository


# FOOD before DRINKS regardless of how the database sorts strings
GROUP_ORDER = case(
    {group: position for position, group in enumerate(MenuGroup)},
    value=Category.group,
)


class CategoryRepository(BaseRepository[Category]):
    """
    Repository for Category entities.

    Default ordering: group, sort_order, name.
    """

    @property
    def model(self) -> type[Category]:
        return Category

    def _base_query(self) -> Select:
        return select(Category).order_by(GROUP_ORDER, Category.sort_order, Category.name, Category.id)

    def find_by_name(self, name: str, *, exclude_id: int | None = None) -> Category | None:
        """Case-insensitive lookup by name, optionally ignoring one category."""
        query = select(Category).where(func.lower(Category.name) == name.strip().lower())
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        return self._db.scalar(query)

    def max_sort_order(self, group: MenuGroup) -> int | None:
        """Highest sort_order in ``group``, or None if the group is empty."""
        return self._db.scalar(
            select(func.max(Category.sort_order)).where(Category.group == group)
        )
