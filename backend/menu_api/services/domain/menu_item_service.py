"""
Menu Item Service.

Business rules:
- category_id must reference an existing category (never an orphan)
- Both prices are present and >= 0
- Tags come from the fixed vocabulary
- The public menu only ever sees available items
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menu_api.models import MenuItem
from menu_api.repositories import CategoryRepository, MenuItemFilters, MenuItemRepository
from menu_api.services.base_service import BaseCRUDService
from shared.config.constants import Limits
from shared.utils.admin_schemas import MenuItemOutput
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import clean_name, normalize_tags

PRICE_FIELDS = ("price_room", "price_restaurant")


class MenuItemService(BaseCRUDService[MenuItem, MenuItemOutput]):

    def __init__(self, db: Session):
        self._menu_items = MenuItemRepository(db)
        self._categories = CategoryRepository(db)
        super().__init__(
            db=db,
            repo=self._menu_items,
            output_schema=MenuItemOutput,
            entity_name="Menu item",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_menu_items(
        self,
        *,
        category_id: int | None = None,
        category_name: str | None = None,
        available: bool | None = None,
    ) -> list[MenuItemOutput]:
        """Menu items ordered by name, optionally filtered."""
        filters = MenuItemFilters(
            category_id=category_id,
            category_name=category_name,
            available=available,
        )
        return [self.to_output(item) for item in self._menu_items.find_filtered(filters)]

    def get_menu_item(self, item_id: int, *, available_only: bool = False) -> MenuItemOutput:
        """
        Raises:
            NotFoundError: Unknown item, or hidden item when ``available_only``.
        """
        item = self.get_entity(item_id)
        if available_only and not item.available:
            raise NotFoundError(self._entity_name, item_id, reason="unavailable")
        return self.to_output(item)

    def get_menu_items_by_category(
        self, category_id: int, *, available: bool | None = None
    ) -> list[MenuItemOutput]:
        """
        Raises:
            NotFoundError: If the category does not exist.
        """
        if not self._categories.exists(category_id):
            raise NotFoundError("Category", category_id)
        return self.list_menu_items(category_id=category_id, available=available)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create_menu_item(self, data: dict[str, Any], actor: str | None = None) -> MenuItemOutput:
        return self.create(data, actor)

    def update_menu_item(
        self, item_id: int, data: dict[str, Any], actor: str | None = None
    ) -> MenuItemOutput:
        return self.update(item_id, data, actor)

    def delete_menu_item(self, item_id: int, actor: str | None = None) -> None:
        self.delete(item_id, actor)

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        for required in ("name", "category_id", *PRICE_FIELDS):
            if data.get(required) is None:
                raise ValidationError(f"The {required} field is required.", field=required)

        data.setdefault("available", True)
        data["tags"] = data.get("tags") or []
        return self._check_fields(data)

    def _validate_update(self, entity: MenuItem, data: dict[str, Any]) -> dict[str, Any]:
        return self._check_fields(data)

    def _check_fields(self, data: dict[str, Any]) -> dict[str, Any]:
        if "name" in data:
            try:
                data["name"] = clean_name(data["name"])
            except ValueError as e:
                raise ValidationError(str(e), field="name")

        if "category_id" in data and not self._categories.exists(data["category_id"]):
            raise ValidationError(
                "The selected category id is invalid.",
                field="category_id",
                category_id=data["category_id"],
            )

        for field in PRICE_FIELDS:
            if field in data:
                data[field] = _non_negative_price(data[field], field)

        if "tags" in data:
            try:
                data["tags"] = normalize_tags(data["tags"])
            except ValueError as e:
                raise ValidationError(str(e), field="tags")

        return data

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        # Category deleted between the existence check and the commit
        raise ValidationError("The selected category id is invalid.", field="category_id")


def _non_negative_price(value: Any, field: str) -> Decimal:
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"The {field} must be a number.", field=field)
    if not price.is_finite() or price < 0:
        raise ValidationError(f"The {field} must be at least 0.", field=field)
    if price > Limits.MAX_PRICE:
        raise ValidationError(
            f"The {field} may not be greater than {Limits.MAX_PRICE}.", field=field
        )
    return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
