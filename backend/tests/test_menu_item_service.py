"""
Tests for MenuItemService.
"""

from decimal import Decimal

import pytest

from menu_api.models import MenuItem
from menu_api.services.domain import MenuItemService
from shared.utils.exceptions import NotFoundError, ValidationError


@pytest.fixture
def service(db_session):
    return MenuItemService(db_session)


def _data(category_id: int, **overrides) -> dict:
    data = {
        "name": "Jollof Rice",
        "category_id": category_id,
        "price_room": Decimal("4500"),
        "price_restaurant": Decimal("4000"),
    }
    data.update(overrides)
    return data


class TestMenuItemCreation:

    def test_create(self, service, seed_category):
        item = service.create_menu_item(_data(seed_category.id), actor="admin")
        assert item.available is True
        assert item.tags == []
        assert item.category.name == "STARTERS"
        assert item.price_room == 4500.0

    def test_price_is_rounded_to_cents(self, service, seed_category):
        item = service.create_menu_item(_data(seed_category.id, price_room="12.345"))
        assert item.price_room == 12.35

    def test_zero_price_allowed(self, service, seed_category):
        item = service.create_menu_item(_data(seed_category.id, price_room=0))
        assert item.price_room == 0

    def test_negative_price_rejected(self, service, seed_category):
        with pytest.raises(ValidationError) as exc_info:
            service.create_menu_item(_data(seed_category.id, price_restaurant=Decimal("-0.01")))
        assert exc_info.value.error == {"price_restaurant": ["The price_restaurant must be at least 0."]}

    def test_non_numeric_price_rejected(self, service, seed_category):
        with pytest.raises(ValidationError):
            service.create_menu_item(_data(seed_category.id, price_room="free"))

    @pytest.mark.parametrize("missing", ["name", "category_id", "price_room", "price_restaurant"])
    def test_required_fields(self, service, seed_category, missing):
        data = _data(seed_category.id)
        del data[missing]
        with pytest.raises(ValidationError) as exc_info:
            service.create_menu_item(data)
        assert missing in exc_info.value.error

    def test_unknown_category_creates_nothing(self, service, db_session):
        with pytest.raises(ValidationError):
            service.create_menu_item(_data(999))
        assert db_session.query(MenuItem).count() == 0

    def test_tags_normalized(self, service, seed_category):
        item = service.create_menu_item(_data(seed_category.id, tags=["spicy", "Spicy", "NEW"]))
        assert item.tags == ["Spicy", "New"]

    def test_unknown_tag_rejected(self, service, seed_category):
        with pytest.raises(ValidationError):
            service.create_menu_item(_data(seed_category.id, tags=["Keto"]))


class TestMenuItemQueries:

    def test_filter_by_availability(self, service, seed_menu_item, seed_hidden_item):
        assert [i.name for i in service.list_menu_items(available=True)] == ["Spring Rolls"]
        assert [i.name for i in service.list_menu_items(available=False)] == ["Suya Platter"]
        assert len(service.list_menu_items()) == 2

    def test_filter_by_category_name(self, service, seed_menu_item):
        assert len(service.list_menu_items(category_name="Starters")) == 1
        assert service.list_menu_items(category_name="COFFEE") == []

    def test_get_hidden_item(self, service, seed_hidden_item):
        assert service.get_menu_item(seed_hidden_item.id).available is False
        with pytest.raises(NotFoundError):
            service.get_menu_item(seed_hidden_item.id, available_only=True)

    def test_items_by_missing_category(self, service):
        with pytest.raises(NotFoundError):
            service.get_menu_items_by_category(999)


class TestMenuItemUpdate:

    def test_partial_update_leaves_other_fields(self, service, seed_menu_item):
        item = service.update_menu_item(seed_menu_item.id, {"name": "Veg Spring Rolls"})
        assert item.name == "Veg Spring Rolls"
        assert item.price_room == 3500
        assert item.tags == ["Vegetarian"]

    def test_update_to_missing_category(self, service, seed_menu_item):
        with pytest.raises(ValidationError):
            service.update_menu_item(seed_menu_item.id, {"category_id": 999})

    def test_update_missing_item(self, service):
        with pytest.raises(NotFoundError):
            service.update_menu_item(999, {"name": "X"})


class TestMenuItemDeletion:

    def test_delete(self, service, db_session, seed_menu_item):
        service.delete_menu_item(seed_menu_item.id)
        assert db_session.get(MenuItem, seed_menu_item.id) is None

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_menu_item(999)
