"""
Catalog Models: Category, MenuItem.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import MenuGroup
from .base import Base, IdType, TimestampMixin


class Category(TimestampMixin, Base):
    """
    Menu category, partitioned into FOOD or DRINKS.

    Display order inside a group is (sort_order, name). Names are unique
    across all categories regardless of case.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    group: Mapped[MenuGroup] = mapped_column(
        "group",
        Enum(MenuGroup, name="menu_group", native_enum=False, length=16),
        nullable=False,
        index=True,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    image_url: Mapped[Optional[str]] = mapped_column(Text)

    # passive_deletes: the database enforces RESTRICT, the ORM must not null out FKs
    menu_items: Mapped[list["MenuItem"]] = relationship(
        back_populates="category",
        passive_deletes="all",
    )

    __table_args__ = (
        Index("ix_category_group_order", "group", "sort_order"),
        CheckConstraint("sort_order >= 1", name="ck_category_sort_order_positive"),
    )


class MenuItem(TimestampMixin, Base):
    """
    A dish or drink. Always references an existing category.
    """

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("category.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    price_room: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_restaurant: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    category: Mapped["Category"] = relationship(back_populates="menu_items", lazy="joined")

    __table_args__ = (
        CheckConstraint("price_room >= 0", name="ck_menu_item_price_room_non_negative"),
        CheckConstraint(
            "price_restaurant >= 0", name="ck_menu_item_price_restaurant_non_negative"
        ),
    )


# Case-insensitive uniqueness of category names
Index("uq_category_name_lower", func.lower(Category.name), unique=True)
