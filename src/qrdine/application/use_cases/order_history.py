from __future__ import annotations

from datetime import date

from pydantic import ValidationError

from qrdine.application.dto.requests import DateRangeRequest
from qrdine.application.dto.responses import OrderResponse
from qrdine.application.mappers.order_mapper import to_order_response
from qrdine.application.ports.repositories import OrderRepository
from qrdine.domain.order.entities import OrderStatus

DateInput = date | str | None


class InvalidDateRangeError(Exception):
    pass


class InvalidOrderFilterError(Exception):
    pass


def parse_date_range(start: DateInput, end: DateInput) -> tuple[date | None, date | None]:
    try:
        request_dto = DateRangeRequest(start_date=start or None, end_date=end or None)
    except ValidationError as exc:
        raise InvalidDateRangeError(f"invalid date range: {start!r} - {end!r}") from exc
    return request_dto.start_date, request_dto.end_date


class GetOrderHistory:
    """Orders in ledger order, filtered by creation day when both bounds are given."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, start: DateInput = None, end: DateInput = None) -> list[OrderResponse]:
        start_date, end_date = parse_date_range(start, end)
        orders = self._order_repository.list(start=start_date, end=end_date)
        return [to_order_response(order) for order in orders]


class ListRecentOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, status: str = "all") -> list[OrderResponse]:
        normalized_status = status.lower()
        orders = self._order_repository.list()
        if normalized_status != "all":
            try:
                wanted = OrderStatus(normalized_status)
            except ValueError as exc:
                raise InvalidOrderFilterError(f"invalid order status filter: {status}") from exc
            orders = [order for order in orders if order.status == wanted]

        orders.sort(key=lambda order: order.created_at, reverse=True)
        return [to_order_response(order) for order in orders]
