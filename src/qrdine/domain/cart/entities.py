from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable

from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.common.money import line_total, sum_amounts
from qrdine.domain.menu.entities import MenuItem


@dataclass(frozen=True)
class CartItem:
    item: MenuItem
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def item_id(self) -> MenuItemId:
        return self.item.item_id

    @property
    def price(self) -> Decimal:
        return self.item.price

    @property
    def line_total(self) -> Decimal:
        return line_total(self.item.price, self.quantity)


class Cart:
    """Ordered selection of menu item snapshots, at most one entry per item id."""

    def __init__(self, items: Iterable[CartItem] = ()) -> None:
        self._entries: dict[MenuItemId, CartItem] = {}
        self.load(items)

    def load(self, items: Iterable[CartItem]) -> None:
        self._entries.clear()
        for entry in items:
            existing = self._entries.get(entry.item_id)
            if existing is None:
                self._entries[entry.item_id] = entry
            else:
                self._entries[entry.item_id] = replace(
                    existing, quantity=existing.quantity + entry.quantity
                )

    @property
    def items(self) -> list[CartItem]:
        return list(self._entries.values())

    @property
    def total_items(self) -> int:
        return sum(entry.quantity for entry in self._entries.values())

    @property
    def total_amount(self) -> Decimal:
        return sum_amounts(entry.line_total for entry in self._entries.values())

    def is_empty(self) -> bool:
        return not self._entries

    def get(self, item_id: MenuItemId) -> CartItem | None:
        return self._entries.get(item_id)

    def add(self, item: MenuItem) -> CartItem:
        existing = self._entries.get(item.item_id)
        if existing is None:
            entry = CartItem(item=item, quantity=1)
        else:
            entry = replace(existing, quantity=existing.quantity + 1)
        self._entries[item.item_id] = entry
        return entry

    def update_quantity(self, item_id: MenuItemId, quantity: int) -> bool:
        if quantity < 1:
            return False
        existing = self._entries.get(item_id)
        if existing is None or existing.quantity == quantity:
            return False
        self._entries[item_id] = replace(existing, quantity=quantity)
        return True

    def remove(self, item_id: MenuItemId) -> bool:
        return self._entries.pop(item_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple[CartItem, ...]:
        return tuple(self._entries.values())
