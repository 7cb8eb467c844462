from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.common.money import parse_price, to_json_number
from qrdine.domain.menu.entities import (
    DEFAULT_MENU_ITEMS,
    MenuItem,
    categories,
    next_menu_item_id,
)


def _item(item_id: str = "dish-001", **overrides: object) -> MenuItem:
    fields: dict[str, object] = {
        "item_id": MenuItemId(item_id),
        "name": "宫保鸡丁",
        "description": "",
        "price": Decimal("48"),
        "image": "",
        "category": "热菜",
    }
    fields.update(overrides)
    return MenuItem(**fields)  # type: ignore[arg-type]


def test_parse_price_rejects_negative_and_garbage() -> None:
    assert parse_price(20) == Decimal("20")
    assert parse_price("12.50") == Decimal("12.50")
    with pytest.raises(ValueError):
        parse_price(-1)
    with pytest.raises(ValueError):
        parse_price("abc")
    with pytest.raises(ValueError):
        parse_price(True)
    with pytest.raises(ValueError):
        parse_price(None)


def test_parse_price_rounds_float_artifacts_to_cents() -> None:
    assert parse_price("0.30000000000000004") == Decimal("0.30")
    assert parse_price(0.1 * 3) == Decimal("0.30")
    assert parse_price("12.345") == Decimal("12.35")
    with pytest.raises(ValueError):
        parse_price("1e40")


def test_to_json_number_keeps_integers_integral() -> None:
    assert to_json_number(Decimal("48")) == 48
    assert isinstance(to_json_number(Decimal("48.0")), int)
    assert to_json_number(Decimal("12.5")) == 12.5


def test_to_json_number_falls_back_to_string_when_float_is_inexact() -> None:
    amount = Decimal("123456789012345678.25")

    encoded = to_json_number(amount)

    assert encoded == "123456789012345678.25"
    assert parse_price(encoded) == amount


def test_menu_item_requires_name_and_category() -> None:
    with pytest.raises(ValueError):
        _item(name="   ")
    with pytest.raises(ValueError):
        _item(category="")
    with pytest.raises(ValueError):
        _item(price=Decimal("-0.01"))


def test_menu_item_price_is_limited_to_cents() -> None:
    assert _item(price=Decimal("12.50")).price == Decimal("12.5")
    assert _item(price=Decimal("12.500")).price == Decimal("12.5")
    with pytest.raises(ValueError):
        _item(price=Decimal("12.345"))


def test_with_updates_keeps_id_and_validates() -> None:
    item = _item()
    updated = item.with_updates(item_id="dish-999", price=Decimal("50"), tags=["川菜"])

    assert updated.item_id == "dish-001"
    assert updated.price == Decimal("50")
    assert updated.tags == ("川菜",)
    assert item.price == Decimal("48")
    with pytest.raises(ValueError):
        item.with_updates(name="")


def test_next_menu_item_id_uses_count_and_skips_taken_ids() -> None:
    assert next_menu_item_id(list(DEFAULT_MENU_ITEMS)) == "dish-007"

    after_delete = [item for item in DEFAULT_MENU_ITEMS if item.item_id != "dish-002"]
    assert next_menu_item_id(after_delete) == "dish-007"

    gap_at_end = [item for item in DEFAULT_MENU_ITEMS if item.item_id != "dish-006"]
    assert next_menu_item_id(gap_at_end) == "dish-006"


def test_categories_in_first_seen_order() -> None:
    assert categories(DEFAULT_MENU_ITEMS) == ["热菜", "招牌菜", "素菜", "主食", "甜品"]
