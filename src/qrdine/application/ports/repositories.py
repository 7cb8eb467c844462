from __future__ import annotations

from datetime import date
from typing import Protocol

from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import MenuItemId, OrderId, TableId
from qrdine.domain.menu.entities import MenuItem
from qrdine.domain.order.entities import Order


class MenuRepository(Protocol):
    def list(self) -> list[MenuItem]: ...

    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def add(self, item: MenuItem) -> None: ...

    def update(self, item: MenuItem) -> None: ...

    def delete(self, item_id: MenuItemId) -> None: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def update(self, order: Order) -> None: ...

    def list(self, start: date | None = None, end: date | None = None) -> list[Order]: ...


class CartRepository(Protocol):
    def load(self) -> list[CartItem]: ...

    def save(self, items: list[CartItem]) -> None: ...

    def clear(self) -> None: ...


class SessionRepository(Protocol):
    def get_table_number(self) -> TableId | None: ...

    def set_table_number(self, table_number: TableId) -> None: ...

    def is_staff_logged_in(self) -> bool: ...

    def set_staff_logged_in(self, logged_in: bool) -> None: ...
