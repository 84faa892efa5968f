"""
Property-based tests with Hypothesis.
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st
from sqlalchemy.orm import sessionmaker

from menu_api.models import Base, Category
from menu_api.services.domain import CategoryService
from menu_api.services.domain.menu_item_service import _non_negative_price
from shared.config.constants import MENU_TAGS, MenuGroup
from shared.infrastructure.db import create_db_engine
from shared.utils.exceptions import ValidationError
from shared.utils.validators import clean_name, normalize_tags, validate_image_url


GROUP_RANK = {MenuGroup.FOOD: 0, MenuGroup.DRINKS: 1}

category_rows = st.lists(
    st.tuples(
        st.sampled_from(list(MenuGroup)),
        st.integers(min_value=1, max_value=5),
    ),
    min_size=1,
    max_size=12,
)


class TestCategoryOrderingProperties:

    @given(
        rows=category_rows,
        names=st.lists(
            st.text(alphabet="ABCDEFGHIJ", min_size=1, max_size=6),
            min_size=12,
            max_size=12,
            unique=True,
        ),
    )
    @settings(max_examples=25, deadline=None)
    def test_list_is_sorted_by_group_order_name(self, rows, names):
        """Property: listing is ordered by (group, sort_order, name) whatever the insert order."""
        engine = create_db_engine("sqlite://")
        Base.metadata.create_all(bind=engine)
        session = sessionmaker(bind=engine, expire_on_commit=False)()
        try:
            for (group, order), name in zip(rows, names):
                session.add(Category(name=name, group=group, sort_order=order))
            session.commit()

            listed = CategoryService(session).list_categories()
            keys = [(GROUP_RANK[c.group], c.sort_order, c.name) for c in listed]
            assert keys == sorted(keys)
            assert len(listed) == len(rows)
        finally:
            session.close()
            engine.dispose()

    @given(orders=st.lists(st.integers(min_value=1, max_value=1000), max_size=8))
    @settings(max_examples=25, deadline=None)
    def test_next_sort_order_is_max_plus_one(self, orders):
        """Property: an omitted sort_order lands right after the group's maximum."""
        engine = create_db_engine("sqlite://")
        Base.metadata.create_all(bind=engine)
        session = sessionmaker(bind=engine, expire_on_commit=False)()
        try:
            for i, order in enumerate(orders):
                session.add(Category(name=f"C{i}", group=MenuGroup.FOOD, sort_order=order))
            session.commit()

            created = CategoryService(session).create_category(
                {"name": "NEW", "group": MenuGroup.FOOD}
            )
            assert created.sort_order == max(orders, default=0) + 1
        finally:
            session.close()
            engine.dispose()


class TestPriceProperties:

    @given(price=st.decimals(min_value=0, max_value=99_999_999, places=2))
    def test_valid_prices_survive_unchanged(self, price):
        """Property: any non-negative two-decimal price is stored as given."""
        assert _non_negative_price(price, "price_room") == price

    @given(price=st.decimals(max_value=Decimal("-0.01"), allow_nan=False, allow_infinity=False))
    def test_negative_prices_rejected(self, price):
        """Property: negative prices never pass."""
        with pytest.raises(ValidationError):
            _non_negative_price(price, "price_room")


class TestValidatorProperties:

    @given(tags=st.lists(st.sampled_from(MENU_TAGS)))
    def test_normalize_tags_idempotent(self, tags):
        """Property: normalizing twice equals normalizing once, without duplicates."""
        once = normalize_tags([t.upper() for t in tags])
        assert normalize_tags(once) == once
        assert len(once) == len(set(once))
        assert set(once) == set(tags)

    @given(name=st.text(min_size=1, max_size=50).filter(lambda s: s.strip()))
    def test_clean_name_has_no_outer_whitespace(self, name):
        try:
            cleaned = clean_name(name)
        except ValueError:
            return  # only control characters
        assert cleaned == cleaned.strip()
        assert cleaned

    @given(path=st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_/.", min_size=1, max_size=40))
    def test_relative_paths_accepted(self, path):
        """Property: site-relative image paths pass through untouched."""
        url = "/images/" + path
        assert validate_image_url(url) == url
