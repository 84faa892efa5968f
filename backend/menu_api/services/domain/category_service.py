"""
Category Service.

Business rules:
- Names are unique across all categories, compared case-insensitively
- sort_order defaults to (max in group) + 1, or 1 for an empty group
- Listing order is group (FOOD, DRINKS), then sort_order, then name
- A category cannot be deleted while menu items reference it

Usage:
    from menu_api.services.domain import CategoryService

    service = CategoryService(db)
    category = service.create_category({"name": "STARTERS", "group": "FOOD"}, actor="admin")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menu_api.models import Category
from menu_api.repositories import CategoryRepository, MenuItemRepository
from menu_api.services.base_service import BaseCRUDService
from shared.config.constants import MenuGroup
from shared.config.logging import catalog_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import CategoryOutput
from shared.utils.exceptions import ConflictError, DuplicateEntityError


class CategoryService(BaseCRUDService[Category, CategoryOutput]):

    def __init__(self, db: Session):
        self._categories = CategoryRepository(db)
        self._menu_items = MenuItemRepository(db)
        super().__init__(
            db=db,
            repo=self._categories,
            output_schema=CategoryOutput,
            entity_name="Category",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_categories(self) -> list[CategoryOutput]:
        """All categories ordered by (group, sort_order, name)."""
        return [self.to_output(c) for c in self._categories.find_all()]

    def get_category(self, category_id: int) -> CategoryOutput:
        return self.get_by_id(category_id)

    def get_next_sort_order(self, group: MenuGroup) -> int:
        """Next free position at the end of ``group``."""
        return (self._categories.max_sort_order(group) or 0) + 1

    def menu_structure(self) -> dict[str, list[str]]:
        """
        Category names per group in display order.

            {"FOOD": ["STARTERS", ...], "DRINKS": ["COFFEE", ...]}
        """
        structure: dict[str, list[str]] = {group.value: [] for group in MenuGroup}
        for category in self._categories.find_all():
            structure[MenuGroup(category.group).value].append(category.name)
        return structure

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create_category(self, data: dict[str, Any], actor: str | None = None) -> CategoryOutput:
        return self.create(data, actor)

    def update_category(
        self, category_id: int, data: dict[str, Any], actor: str | None = None
    ) -> CategoryOutput:
        return self.update(category_id, data, actor)

    def delete_category(self, category_id: int, actor: str | None = None) -> None:
        """
        Delete a category that no menu item references.

        The row is locked before the reference count, and the foreign key
        restricts deletes, so an item inserted concurrently cannot be orphaned.

        Raises:
            NotFoundError: Unknown category.
            ConflictError: Menu items still reference it.
        """
        self.delete(category_id, actor)

    def seed_structure(
        self, structure: Mapping[MenuGroup, Iterable[str]], actor: str | None = None
    ) -> int:
        """
        Create the categories of ``structure`` that do not exist yet.

        Names keep their listed order, appended after the group's current
        last position. Existing categories are left untouched.

        Returns:
            Number of categories created.
        """
        created = 0
        for group, names in structure.items():
            group = MenuGroup(group)
            next_order = self.get_next_sort_order(group)
            for name in names:
                if self._categories.find_by_name(name) is not None:
                    continue
                self._categories.save(Category(name=name, group=group, sort_order=next_order))
                next_order += 1
                created += 1

        safe_commit(self._db)
        catalog_logger.info("Category structure seeded", created=created, actor=actor)
        return created

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data["group"] = MenuGroup(data["group"])
        self._ensure_unique_name(data["name"])

        if data.get("sort_order") is None:
            data["sort_order"] = self.get_next_sort_order(data["group"])
        return data

    def _validate_update(self, entity: Category, data: dict[str, Any]) -> dict[str, Any]:
        if "name" in data:
            self._ensure_unique_name(data["name"], exclude_id=entity.id)

        if "group" in data:
            data["group"] = MenuGroup(data["group"])
            # Moving to another group without a position appends to its end
            if data["group"] != entity.group and data.get("sort_order") is None:
                data["sort_order"] = self.get_next_sort_order(data["group"])
        return data

    def _validate_delete(self, entity: Category) -> None:
        referencing = self._menu_items.count_by_category(entity.id)
        if referencing:
            category_id, name = entity.id, entity.name
            # Release the row lock before reporting
            self._db.rollback()
            raise ConflictError(
                f"Category '{name}' still has {referencing} menu item(s). "
                "Move or delete them first.",
                category_id=category_id,
                menu_items=referencing,
            )

    def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        if self._categories.find_by_name(name, exclude_id=exclude_id) is not None:
            raise DuplicateEntityError("Category", "name", name)

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        if operation == "delete":
            raise ConflictError("Category is still referenced by menu items")
        raise DuplicateEntityError("Category", "name")
