from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.application.mappers.menu_mapper import to_cart_item_response
from qrdine.application.use_cases.get_order import GetOrder, GetOrderStatus, OrderNotFoundError
from qrdine.application.use_cases.menu_catalog import UpdateMenuItem
from qrdine.application.use_cases.order_history import (
    GetOrderHistory,
    InvalidDateRangeError,
    InvalidOrderFilterError,
    ListRecentOrders,
)
from qrdine.application.use_cases.place_order import CreateOrder, OrderValidationError
from qrdine.application.use_cases.update_order_status import (
    InvalidOrderStatusError,
    InvalidOrderTransitionError,
    UpdateOrderStatus,
)
from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import MenuItemId, OrderId
from qrdine.domain.menu.entities import DEFAULT_MENU_ITEMS
from qrdine.infrastructure.repositories.menu_repo import KeyValueMenuRepository
from qrdine.infrastructure.repositories.order_repo import ORDERS_KEY, KeyValueOrderRepository
from qrdine.infrastructure.storage.memory import InMemoryKeyValueStore

MAY_FIRST = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeRandom(random.Random):
    def __init__(self, suffixes: list[int]) -> None:
        super().__init__(0)
        self._suffixes = list(suffixes)

    def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
        return self._suffixes.pop(0)

    def randint(self, a: int, b: int) -> int:
        return 12


def _lines() -> list[CartItem]:
    return [
        CartItem(item=DEFAULT_MENU_ITEMS[0], quantity=2),
        CartItem(item=DEFAULT_MENU_ITEMS[3], quantity=1),
    ]


def _create(
    repo: KeyValueOrderRepository,
    clock: FakeClock,
    table: str = "T1",
) -> str:
    return CreateOrder(repo, clock=clock).execute(table, _lines()).orderId


def test_create_order_appends_pending_order() -> None:
    store = InMemoryKeyValueStore()
    repo = KeyValueOrderRepository(store)

    result = CreateOrder(repo, clock=FakeClock(MAY_FIRST)).execute("T1", _lines())

    assert result.orderId.startswith(f"ORD{int(MAY_FIRST.timestamp() * 1000)}")
    assert 10 <= result.estimatedTime <= 25
    order = GetOrder(repo).execute(OrderId(result.orderId))
    assert order.status == "pending"
    assert order.progress == 20
    assert order.totalAmount == Decimal("128")
    assert order.tableNumber == "T1"
    assert order.createdAt == MAY_FIRST


def test_create_order_accepts_cart_item_payloads() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    payload = to_cart_item_response(CartItem(item=DEFAULT_MENU_ITEMS[2], quantity=3)).model_dump()

    result = CreateOrder(repo, clock=FakeClock(MAY_FIRST)).execute("T2", [payload])

    assert GetOrder(repo).execute(OrderId(result.orderId)).totalAmount == Decimal("504")


def test_create_order_rejects_empty_items_without_writing() -> None:
    store = InMemoryKeyValueStore()
    repo = KeyValueOrderRepository(store)

    with pytest.raises(OrderValidationError):
        CreateOrder(repo).execute("T1", [])

    assert ORDERS_KEY not in store.values


def test_create_order_rejects_bad_line_and_blank_table() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    bad_line = {"id": "dish-001", "name": "宫保鸡丁", "price": 48, "category": "热菜", "quantity": 0}

    with pytest.raises(OrderValidationError):
        CreateOrder(repo).execute("T1", [bad_line])
    with pytest.raises(OrderValidationError):
        CreateOrder(repo).execute("  ", _lines())

    assert repo.list() == []


def test_order_ids_are_regenerated_on_collision() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    clock = FakeClock(MAY_FIRST)
    use_case = CreateOrder(repo, rng=FakeRandom([5, 5, 6]), clock=clock)

    first = use_case.execute("T1", _lines())
    second = use_case.execute("T1", _lines())

    assert first.orderId != second.orderId
    assert second.orderId.endswith("6")
    assert first.estimatedTime == 12


def test_order_total_is_frozen_against_menu_price_changes() -> None:
    store = InMemoryKeyValueStore()
    orders = KeyValueOrderRepository(store)
    order_id = _create(orders, FakeClock(MAY_FIRST))

    UpdateMenuItem(KeyValueMenuRepository(store)).execute(MenuItemId("dish-001"), {"price": 100})

    order = GetOrder(orders).execute(OrderId(order_id))
    assert order.totalAmount == Decimal("128")
    assert order.items[0].price == Decimal("48")


def test_get_order_status_and_missing_order() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    order_id = _create(repo, FakeClock(MAY_FIRST))

    status = GetOrderStatus(repo).execute(OrderId(order_id))
    assert status.status == "pending"
    assert status.progress == 20

    with pytest.raises(OrderNotFoundError):
        GetOrder(repo).execute(OrderId("ORD-missing"))
    with pytest.raises(OrderNotFoundError):
        GetOrderStatus(repo).execute(OrderId("ORD-missing"))


def test_update_status_changes_only_target_order() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    clock = FakeClock(MAY_FIRST)
    first = _create(repo, clock)
    clock.now = MAY_FIRST + timedelta(minutes=1)
    second = _create(repo, clock)

    updated = UpdateOrderStatus(repo).execute(OrderId(first), "preparing")

    assert updated.status == "preparing"
    assert updated.progress == 40
    assert GetOrder(repo).execute(OrderId(second)).status == "pending"


def test_update_status_rejects_unknown_and_reserved_statuses() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    order_id = _create(repo, FakeClock(MAY_FIRST))

    with pytest.raises(InvalidOrderStatusError):
        UpdateOrderStatus(repo).execute(OrderId(order_id), "teleported")
    with pytest.raises(InvalidOrderStatusError):
        UpdateOrderStatus(repo).execute(OrderId(order_id), "pending_payment")
    with pytest.raises(OrderNotFoundError):
        UpdateOrderStatus(repo).execute(OrderId("ORD-missing"), "ready")


def test_lenient_update_allows_backwards_moves() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    order_id = _create(repo, FakeClock(MAY_FIRST))
    use_case = UpdateOrderStatus(repo)

    use_case.execute(OrderId(order_id), "completed")
    reopened = use_case.execute(OrderId(order_id), "pending")

    assert reopened.status == "pending"


def test_strict_update_rejects_skipped_steps() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    order_id = _create(repo, FakeClock(MAY_FIRST))
    use_case = UpdateOrderStatus(repo, strict=True)

    with pytest.raises(InvalidOrderTransitionError):
        use_case.execute(OrderId(order_id), "served")

    assert use_case.execute(OrderId(order_id), "preparing").status == "preparing"
    assert GetOrder(repo).execute(OrderId(order_id)).status == "preparing"


def test_history_filters_by_inclusive_day_range() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    clock = FakeClock(datetime(2024, 4, 30, 23, 59, tzinfo=timezone.utc))
    before = _create(repo, clock)
    clock.now = datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)
    start_of_range = _create(repo, clock)
    clock.now = datetime(2024, 5, 2, 23, 59, 59, tzinfo=timezone.utc)
    end_of_range = _create(repo, clock)
    clock.now = datetime(2024, 5, 3, 0, 0, tzinfo=timezone.utc)
    _create(repo, clock)

    history = GetOrderHistory(repo).execute("2024-05-01", "2024-05-02")

    assert [order.id for order in history] == [start_of_range, end_of_range]
    assert len(GetOrderHistory(repo).execute()) == 4
    assert len(GetOrderHistory(repo).execute("2024-05-01", None)) == 4
    assert before not in [order.id for order in history]


def test_history_rejects_malformed_dates() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())

    with pytest.raises(InvalidDateRangeError):
        GetOrderHistory(repo).execute("yesterday", "2024-05-02")


def test_recent_orders_newest_first_with_status_filter() -> None:
    repo = KeyValueOrderRepository(InMemoryKeyValueStore())
    clock = FakeClock(MAY_FIRST)
    oldest = _create(repo, clock)
    clock.now = MAY_FIRST + timedelta(hours=1)
    newest = _create(repo, clock)
    UpdateOrderStatus(repo).execute(OrderId(oldest), "ready")

    assert [order.id for order in ListRecentOrders(repo).execute()] == [newest, oldest]
    assert [order.id for order in ListRecentOrders(repo).execute("READY")] == [oldest]
    with pytest.raises(InvalidOrderFilterError):
        ListRecentOrders(repo).execute("lost")
