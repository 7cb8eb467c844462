from __future__ import annotations

from qrdine.application.ports.repositories import MenuRepository
from qrdine.application.ports.storage import KeyValueStore
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import DEFAULT_MENU_ITEMS, MenuItem
from qrdine.infrastructure.repositories.records import menu_item_from_record, menu_item_to_record
from qrdine.infrastructure.storage.json_collection import JsonCollection

MENU_ITEMS_KEY = "menuItems"


class KeyValueMenuRepository(MenuRepository):
    """Catalog stored as one JSON array; the seed catalog stands in until the first write."""

    def __init__(
        self,
        store: KeyValueStore,
        seed: tuple[MenuItem, ...] = DEFAULT_MENU_ITEMS,
    ) -> None:
        self._collection = JsonCollection(store, MENU_ITEMS_KEY)
        self._seed = seed

    def list(self) -> list[MenuItem]:
        items = self._collection.load(menu_item_from_record)
        if items is None:
            return list(self._seed)
        return items

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        for item in self.list():
            if item.item_id == item_id:
                return item
        return None

    def add(self, item: MenuItem) -> None:
        items = self.list()
        items.append(item)
        self._save(items)

    def update(self, item: MenuItem) -> None:
        items = [item if current.item_id == item.item_id else current for current in self.list()]
        self._save(items)

    def delete(self, item_id: MenuItemId) -> None:
        self._save([item for item in self.list() if item.item_id != item_id])

    def replace_all(self, items: list[MenuItem]) -> None:
        self._save(items)

    def _save(self, items: list[MenuItem]) -> None:
        self._collection.save([menu_item_to_record(item) for item in items])
