from __future__ import annotations

import logging
from datetime import datetime, timezone

from qrdine.application.dto.responses import OrderResponse
from qrdine.application.mappers.order_mapper import to_order_response
from qrdine.application.metrics.order_lifecycle import record_transition
from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.use_cases.get_order import OrderNotFoundError
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import OrderStatus, OrderTransitionError

logger = logging.getLogger(__name__)

# pending_payment is reserved for checkout; staff cannot move orders into it.
STAFF_STATUSES = frozenset(OrderStatus) - {OrderStatus.PENDING_PAYMENT}


class InvalidOrderStatusError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class UpdateOrderStatus:
    def __init__(self, order_repository: OrderRepository, strict: bool = False) -> None:
        self._order_repository = order_repository
        self._strict = strict

    def execute(self, order_id: OrderId, status: str | OrderStatus) -> OrderResponse:
        try:
            new_status = OrderStatus(status)
        except ValueError as exc:
            raise InvalidOrderStatusError(f"invalid order status: {status}") from exc
        if new_status not in STAFF_STATUSES:
            raise InvalidOrderStatusError(f"invalid order status: {new_status.value}")

        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        try:
            updated = order.transition_to(new_status, strict=self._strict)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        self._order_repository.update(updated)
        record_transition(updated, from_status=order.status, now=datetime.now(timezone.utc))
        logger.info(
            "order_status_updated order_id=%s from=%s to=%s",
            order_id,
            order.status.value,
            new_status.value,
        )
        return to_order_response(updated)
