from __future__ import annotations

from qrdine.application.dto.responses import OrderResponse, OrderStatusResponse
from qrdine.application.mappers.order_mapper import to_order_response, to_order_status_response
from qrdine.application.ports.repositories import OrderRepository
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import Order


class OrderNotFoundError(Exception):
    pass


def _require_order(order_repository: OrderRepository, order_id: OrderId) -> Order:
    order = order_repository.get(order_id)
    if order is None:
        raise OrderNotFoundError(f"order {order_id} not found")
    return order


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        return to_order_response(_require_order(self._order_repository, order_id))


class GetOrderStatus:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderStatusResponse:
        return to_order_status_response(_require_order(self._order_repository, order_id))
