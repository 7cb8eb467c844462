from __future__ import annotations

from qrdine.application.ports.repositories import SessionRepository
from qrdine.application.ports.storage import KeyValueStore
from qrdine.domain.common.ids import TableId

TABLE_NUMBER_KEY = "tableNumber"
STAFF_LOGGED_IN_KEY = "merchantLoggedIn"


class KeyValueSessionRepository(SessionRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_table_number(self) -> TableId | None:
        value = self._store.read(TABLE_NUMBER_KEY)
        return TableId(value) if value else None

    def set_table_number(self, table_number: TableId) -> None:
        self._store.write(TABLE_NUMBER_KEY, str(table_number))

    def is_staff_logged_in(self) -> bool:
        return self._store.read(STAFF_LOGGED_IN_KEY) == "true"

    def set_staff_logged_in(self, logged_in: bool) -> None:
        if logged_in:
            self._store.write(STAFF_LOGGED_IN_KEY, "true")
        else:
            self._store.delete(STAFF_LOGGED_IN_KEY)
