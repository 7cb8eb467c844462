from __future__ import annotations

from datetime import date, datetime, time, timezone

from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.ports.storage import KeyValueStore
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import Order
from qrdine.infrastructure.repositories.records import order_from_record, order_to_record
from qrdine.infrastructure.storage.json_collection import JsonCollection

ORDERS_KEY = "orders"


def _day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end, time.max, tzinfo=timezone.utc),
    )


class KeyValueOrderRepository(OrderRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._collection = JsonCollection(store, ORDERS_KEY)

    def _all(self) -> list[Order]:
        return self._collection.load(order_from_record) or []

    def add(self, order: Order) -> None:
        orders = self._all()
        orders.append(order)
        self._save(orders)

    def get(self, order_id: OrderId) -> Order | None:
        for order in self._all():
            if order.order_id == order_id:
                return order
        return None

    def update(self, order: Order) -> None:
        self._save(
            [order if current.order_id == order.order_id else current for current in self._all()]
        )

    def list(self, start: date | None = None, end: date | None = None) -> list[Order]:
        orders = self._all()
        if start is None or end is None:
            return orders
        lower, upper = _day_bounds(start, end)
        return [order for order in orders if lower <= order.created_at <= upper]

    def _save(self, orders: list[Order]) -> None:
        self._collection.save([order_to_record(order) for order in orders])
