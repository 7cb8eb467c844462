from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def _non_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must be non-empty")
    return value


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class AddMenuItemRequest(CamelBaseModel):
    name: str
    description: str = ""
    price: Decimal = Field(ge=0, decimal_places=2)
    image: str = ""
    category: str
    tags: list[str] | None = None
    popular: bool | None = None

    @field_validator("name", "category")
    @classmethod
    def check_text(cls, value: str | None) -> str | None:
        return _non_blank(value)


class UpdateMenuItemRequest(CamelBaseModel):
    name: str | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    image: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    popular: bool | None = None
    available: bool | None = None

    @field_validator("name", "category")
    @classmethod
    def check_text(cls, value: str | None) -> str | None:
        return _non_blank(value)


class CartLineRequest(CamelBaseModel):
    id: str
    name: str
    description: str = ""
    price: Decimal = Field(ge=0, decimal_places=2)
    image: str = ""
    category: str
    tags: list[str] | None = None
    popular: bool | None = None
    available: bool = True
    quantity: int = Field(ge=1)


class DateRangeRequest(CamelBaseModel):
    start_date: date | None = None
    end_date: date | None = None
