from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence

from pydantic import ValidationError

from qrdine.application.dto.requests import CartLineRequest
from qrdine.application.dto.responses import CreateOrderResponse, SubmitOrderResponse
from qrdine.application.mappers.menu_mapper import cart_item_from_request
from qrdine.application.metrics.order_lifecycle import record_order_created, record_transition
from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.use_cases.authorize_payment import AuthorizePayment
from qrdine.application.use_cases.menu_catalog import describe_validation_error
from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import OrderId, TableId
from qrdine.domain.order.entities import (
    ESTIMATED_TIME_MAX_MINUTES,
    ESTIMATED_TIME_MIN_MINUTES,
    EmptyOrderError,
    Order,
    OrderStatus,
    create_order,
)

logger = logging.getLogger(__name__)

OrderLineInput = CartItem | Mapping[str, Any]


class OrderValidationError(Exception):
    pass


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_order_lines(items: Sequence[OrderLineInput]) -> list[CartItem]:
    lines: list[CartItem] = []
    for item in items:
        if isinstance(item, CartItem):
            lines.append(item)
            continue
        try:
            lines.append(cart_item_from_request(CartLineRequest.model_validate(item)))
        except ValidationError as exc:
            raise OrderValidationError(describe_validation_error(exc)) from exc
    return lines


class CreateOrder:
    """Append a ``pending`` order built from cart snapshots.

    Payment is the caller's concern; a later decline does not remove the
    entry. ``SubmitOrder`` is the variant that holds the order back until
    payment clears.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._order_repository = order_repository
        self._rng = rng or random.Random()
        self._clock = clock

    def execute(self, table_number: str, items: Sequence[OrderLineInput]) -> CreateOrderResponse:
        order = self._append(table_number, items, OrderStatus.PENDING)
        return CreateOrderResponse(
            orderId=str(order.order_id),
            estimatedTime=order.estimated_time,
        )

    def _next_order_id(self, now: datetime) -> OrderId:
        while True:
            order_id = OrderId(f"ORD{int(now.timestamp() * 1000)}{self._rng.randrange(1000)}")
            if self._order_repository.get(order_id) is None:
                return order_id

    def _append(
        self,
        table_number: str,
        items: Sequence[OrderLineInput],
        status: OrderStatus,
    ) -> Order:
        if not table_number or not table_number.strip():
            raise OrderValidationError("table number is required")
        lines = coerce_order_lines(items)

        now = self._clock()
        try:
            order = create_order(
                order_id=self._next_order_id(now),
                table_number=TableId(table_number.strip()),
                items=lines,
                now=now,
                estimated_time=self._rng.randint(
                    ESTIMATED_TIME_MIN_MINUTES, ESTIMATED_TIME_MAX_MINUTES
                ),
                status=status,
            )
        except EmptyOrderError as exc:
            raise OrderValidationError(str(exc)) from exc

        self._order_repository.add(order)
        record_order_created(order)
        logger.info(
            "order_created status=%s total=%s",
            order.status.value,
            order.total_amount,
            extra={"order_id": order.order_id, "table_number": order.table_number},
        )
        return order


class SubmitOrder(CreateOrder):
    """Two-phase submission: ``pending_payment`` first, then ``pending`` or ``cancelled``."""

    def __init__(
        self,
        order_repository: OrderRepository,
        authorize_payment: AuthorizePayment,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        super().__init__(order_repository=order_repository, rng=rng, clock=clock)
        self._authorize_payment = authorize_payment

    def begin(self, table_number: str, items: Sequence[OrderLineInput]) -> Order:
        return self._append(table_number, items, OrderStatus.PENDING_PAYMENT)

    def complete(self, order: Order) -> SubmitOrderResponse:
        try:
            payment = self._authorize_payment.authorize(order.order_id, order.total_amount)
        except Exception:
            # A pending_payment order never outlives a failed authorization.
            self._finalize(order, OrderStatus.CANCELLED)
            raise

        confirmed = self._finalize(order, OrderStatus.PENDING)
        return SubmitOrderResponse(
            orderId=str(confirmed.order_id),
            estimatedTime=confirmed.estimated_time,
            transactionId=str(payment.transaction_id),
            totalAmount=confirmed.total_amount,
        )

    def execute(self, table_number: str, items: Sequence[OrderLineInput]) -> SubmitOrderResponse:
        return self.complete(self.begin(table_number, items))

    def _finalize(self, order: Order, status: OrderStatus) -> Order:
        finalized = order.transition_to(status, strict=True)
        self._order_repository.update(finalized)
        record_transition(finalized, from_status=order.status, now=self._clock())
        logger.info(
            "order_payment_settled order_id=%s status=%s", order.order_id, status.value
        )
        return finalized
