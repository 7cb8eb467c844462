from __future__ import annotations

from qrdine.application.ports.repositories import CartRepository
from qrdine.application.ports.storage import KeyValueStore
from qrdine.domain.cart.entities import CartItem
from qrdine.infrastructure.repositories.records import cart_item_from_record, cart_item_to_record
from qrdine.infrastructure.storage.json_collection import JsonCollection

CART_KEY = "cart"


class KeyValueCartRepository(CartRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._collection = JsonCollection(store, CART_KEY)

    def load(self) -> list[CartItem]:
        return self._collection.load(cart_item_from_record) or []

    def save(self, items: list[CartItem]) -> None:
        self._collection.save([cart_item_to_record(entry) for entry in items])

    def clear(self) -> None:
        self._collection.clear()
