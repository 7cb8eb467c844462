from __future__ import annotations

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import OrderId, TableId
from qrdine.domain.menu.entities import DEFAULT_MENU_ITEMS
from qrdine.domain.order.entities import (
    EmptyOrderError,
    Order,
    OrderStatus,
    OrderTransitionError,
    compute_progress,
    create_order,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    return create_order(
        order_id=OrderId("ORD1"),
        table_number=TableId("T1"),
        items=[
            CartItem(item=DEFAULT_MENU_ITEMS[0], quantity=2),
            CartItem(item=DEFAULT_MENU_ITEMS[3], quantity=1),
        ],
        now=NOW,
        estimated_time=15,
        status=status,
    )


def test_create_order_totals_line_items() -> None:
    order = _order()

    assert order.total_amount == Decimal("128")
    assert order.status == OrderStatus.PENDING
    assert order.created_at == NOW


def test_create_order_rejects_empty_items() -> None:
    with pytest.raises(EmptyOrderError):
        create_order(
            order_id=OrderId("ORD1"),
            table_number=TableId("T1"),
            items=[],
            now=NOW,
            estimated_time=15,
        )


def test_order_rejects_mismatched_total() -> None:
    with pytest.raises(ValueError):
        Order(
            order_id=OrderId("ORD1"),
            table_number=TableId("T1"),
            items=(CartItem(item=DEFAULT_MENU_ITEMS[0], quantity=1),),
            total_amount=Decimal("1"),
            status=OrderStatus.PENDING,
            created_at=NOW,
        )


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (OrderStatus.PENDING, 20),
        (OrderStatus.PREPARING, 40),
        (OrderStatus.READY, 60),
        (OrderStatus.SERVED, 80),
        (OrderStatus.COMPLETED, 100),
        (OrderStatus.CANCELLED, 0),
        (OrderStatus.PENDING_PAYMENT, 0),
    ],
)
def test_progress(status: OrderStatus, expected: int) -> None:
    assert compute_progress(status) == expected
    assert _order(status).progress == expected


def test_lenient_transition_allows_any_move() -> None:
    completed = _order(OrderStatus.COMPLETED)

    reopened = completed.transition_to(OrderStatus.PENDING)

    assert reopened.status == OrderStatus.PENDING
    assert completed.status == OrderStatus.COMPLETED


def test_strict_transition_follows_lifecycle() -> None:
    order = _order()

    assert order.transition_to(OrderStatus.PREPARING, strict=True).status == OrderStatus.PREPARING
    assert order.transition_to(OrderStatus.CANCELLED, strict=True).status == OrderStatus.CANCELLED
    with pytest.raises(OrderTransitionError):
        order.transition_to(OrderStatus.SERVED, strict=True)
    with pytest.raises(OrderTransitionError):
        _order(OrderStatus.COMPLETED).transition_to(OrderStatus.PENDING, strict=True)


def test_strict_transition_to_same_status_is_allowed() -> None:
    order = _order(OrderStatus.READY)

    assert order.transition_to(OrderStatus.READY, strict=True) == order
