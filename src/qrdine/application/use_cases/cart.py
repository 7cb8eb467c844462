from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from decimal import Decimal
from typing import Iterator

from qrdine.application.metrics.order_lifecycle import record_cart_mutation
from qrdine.application.ports.repositories import CartRepository
from qrdine.domain.cart.entities import Cart, CartItem
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import MenuItem

logger = logging.getLogger(__name__)

_active_cart: ContextVar[CartService | None] = ContextVar("active_cart", default=None)


class CartContextError(RuntimeError):
    pass


class CartService:
    """The session's cart, written through to storage after every change.

    Stored entries are bulk-loaded on construction; nothing is written
    while loading.
    """

    def __init__(self, cart_repository: CartRepository) -> None:
        self._cart_repository = cart_repository
        self._cart = Cart(cart_repository.load())

    @property
    def items(self) -> list[CartItem]:
        return self._cart.items

    @property
    def total_items(self) -> int:
        return self._cart.total_items

    @property
    def total_amount(self) -> Decimal:
        return self._cart.total_amount

    def is_empty(self) -> bool:
        return self._cart.is_empty()

    def snapshot(self) -> tuple[CartItem, ...]:
        return self._cart.snapshot()

    def add_to_cart(self, item: MenuItem) -> CartItem:
        entry = self._cart.add(item)
        self._persist("add")
        return entry

    def update_quantity(self, item_id: MenuItemId | str, quantity: int) -> None:
        if self._cart.update_quantity(MenuItemId(str(item_id)), quantity):
            self._persist("update_quantity")

    def remove_from_cart(self, item_id: MenuItemId | str) -> None:
        if self._cart.remove(MenuItemId(str(item_id))):
            self._persist("remove")

    def clear_cart(self) -> None:
        self._cart.clear()
        self._cart_repository.clear()
        record_cart_mutation("clear")

    def _persist(self, operation: str) -> None:
        self._cart_repository.save(self._cart.items)
        record_cart_mutation(operation)
        logger.debug(
            "cart_updated operation=%s total_items=%s total_amount=%s",
            operation,
            self._cart.total_items,
            self._cart.total_amount,
        )


@contextmanager
def cart_session(service: CartService) -> Iterator[CartService]:
    token = _active_cart.set(service)
    try:
        yield service
    finally:
        _active_cart.reset(token)


def get_cart() -> CartService:
    service = _active_cart.get()
    if service is None:
        raise CartContextError("get_cart() must be called inside cart_session()")
    return service
