"""
Pydantic schemas for catalog endpoints (categories and menu items).

Request bodies forbid unknown fields. Update bodies are partial: only the
fields present in the request are applied, and fields that cannot be NULL in
the database reject an explicit null.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from shared.config.constants import Limits, MenuGroup
from shared.utils.validators import clean_name, normalize_tags, validate_image_url


def _reject_nulls(data: Any, fields: tuple[str, ...]) -> Any:
    if isinstance(data, dict):
        for field in fields:
            if field in data and data[field] is None:
                raise ValueError(f"{field} may not be null")
    return data


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryRef(BaseModel):
    """Category summary embedded in every menu item."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    group: MenuGroup


class CategoryOutput(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    group: MenuGroup
    sort_order: int
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryCreate(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    group: MenuGroup
    sort_order: int | None = Field(default=None, ge=1)
    image_url: str | None = None

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str) -> str:
        return clean_name(value)

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class CategoryUpdate(BaseModel):
    model_config = {"extra": "forbid"}

    name: str | None = Field(default=None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    group: MenuGroup | None = None
    sort_order: int | None = Field(default=None, ge=1)
    image_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _no_nulls(cls, data: Any) -> Any:
        return _reject_nulls(data, ("name", "group", "sort_order"))

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str | None) -> str | None:
        return clean_name(value) if value is not None else None

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class MenuStructure(BaseModel):
    """Category names per group, in display order."""

    FOOD: list[str]
    DRINKS: list[str]


# =============================================================================
# Menu Item Schemas
# =============================================================================


class MenuItemOutput(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    description: str | None = None
    category_id: int
    category: CategoryRef
    price_room: float
    price_restaurant: float
    available: bool
    image_url: str | None = None
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MenuItemCreate(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    category_id: int
    price_room: Decimal = Field(ge=0, le=Limits.MAX_PRICE, decimal_places=2)
    price_restaurant: Decimal = Field(ge=0, le=Limits.MAX_PRICE, decimal_places=2)
    available: bool = True
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str) -> str:
        return clean_name(value)

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class MenuItemUpdate(BaseModel):
    model_config = {"extra": "forbid"}

    name: str | None = Field(default=None, min_length=1, max_length=Limits.NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    category_id: int | None = None
    price_room: Decimal | None = Field(default=None, ge=0, le=Limits.MAX_PRICE, decimal_places=2)
    price_restaurant: Decimal | None = Field(
        default=None, ge=0, le=Limits.MAX_PRICE, decimal_places=2
    )
    available: bool | None = None
    image_url: str | None = None
    tags: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _no_nulls(cls, data: Any) -> Any:
        return _reject_nulls(
            data, ("name", "category_id", "price_room", "price_restaurant", "available", "tags")
        )

    @field_validator("name")
    @classmethod
    def _clean_name(cls, value: str | None) -> str | None:
        return clean_name(value) if value is not None else None

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str] | None) -> list[str] | None:
        return normalize_tags(value) if value is not None else None
