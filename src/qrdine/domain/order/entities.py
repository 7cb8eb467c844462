from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import OrderId, TableId
from qrdine.domain.common.money import sum_amounts

ESTIMATED_TIME_MIN_MINUTES = 10
ESTIMATED_TIME_MAX_MINUTES = 25


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


PROGRESS_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.SERVED,
    OrderStatus.COMPLETED,
)

ACTIVE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY})

# Revenue and dashboard totals only count finalized, non-cancelled orders.
NON_REVENUE_STATUSES = frozenset({OrderStatus.CANCELLED, OrderStatus.PENDING_PAYMENT})

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING_PAYMENT: frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED}),
    OrderStatus.PENDING: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.SERVED, OrderStatus.CANCELLED}),
    OrderStatus.SERVED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    table_number: TableId
    items: tuple[CartItem, ...]
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    estimated_time: int | None = None

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")
        expected_total = sum_amounts(item.line_total for item in self.items)
        if self.total_amount != expected_total:
            raise ValueError("order total must equal sum of line totals")

    @property
    def progress(self) -> int:
        return compute_progress(self.status)

    def transition_to(self, new_status: OrderStatus, strict: bool = False) -> Order:
        """Return the order with ``new_status``.

        Without ``strict`` any status may follow any other, matching how the
        dashboard has always behaved. With ``strict`` only the edges in
        ``ALLOWED_TRANSITIONS`` are accepted.
        """
        if strict and new_status != self.status:
            if new_status not in ALLOWED_TRANSITIONS[self.status]:
                raise OrderTransitionError(
                    f"cannot move order from status={self.status.value} to {new_status.value}"
                )
        return replace(self, status=new_status)


def compute_progress(status: OrderStatus) -> int:
    if status not in PROGRESS_SEQUENCE:
        return 0
    return (PROGRESS_SEQUENCE.index(status) + 1) * 20


def create_order(
    order_id: OrderId,
    table_number: TableId,
    items: list[CartItem],
    now: datetime,
    estimated_time: int,
    status: OrderStatus = OrderStatus.PENDING,
) -> Order:
    if not items:
        raise EmptyOrderError("order must contain at least one item")
    return Order(
        order_id=order_id,
        table_number=table_number,
        items=tuple(items),
        total_amount=sum_amounts(item.line_total for item in items),
        status=status,
        created_at=now,
        estimated_time=estimated_time,
    )


class OrderTransitionError(Exception):
    pass


class EmptyOrderError(ValueError):
    pass
