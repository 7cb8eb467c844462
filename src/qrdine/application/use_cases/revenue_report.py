from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from qrdine.application.dto.responses import DashboardStatsResponse, RevenueDatumResponse
from qrdine.application.mappers.order_mapper import to_revenue_datum_response
from qrdine.application.metrics.order_lifecycle import record_revenue_query
from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.use_cases.order_history import DateInput, parse_date_range
from qrdine.domain.common.money import ZERO
from qrdine.domain.order.entities import ACTIVE_STATUSES, OrderStatus
from qrdine.domain.revenue.entities import aggregate_daily_revenue


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetRevenue:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, start: DateInput = None, end: DateInput = None) -> list[RevenueDatumResponse]:
        start_date, end_date = parse_date_range(start, end)
        orders = self._order_repository.list(start=start_date, end=end_date)
        record_revenue_query()
        return [to_revenue_datum_response(datum) for datum in aggregate_daily_revenue(orders)]


class DashboardStats:
    """Headline numbers for the staff dashboard."""

    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._order_repository = order_repository
        self._clock = clock

    def execute(self) -> DashboardStatsResponse:
        orders = [
            order
            for order in self._order_repository.list()
            if order.status != OrderStatus.PENDING_PAYMENT
        ]
        completed = sum(1 for order in orders if order.status == OrderStatus.COMPLETED)
        completion_rate = round(completed / len(orders) * 100) if orders else 0

        today = self._clock().astimezone(timezone.utc).date()
        today_buckets = [
            datum for datum in aggregate_daily_revenue(orders) if datum.date == today
        ]
        return DashboardStatsResponse(
            totalOrders=len(orders),
            activeOrders=sum(1 for order in orders if order.status in ACTIVE_STATUSES),
            completionRate=completion_rate,
            todayRevenue=today_buckets[0].revenue if today_buckets else ZERO,
            todayOrderCount=today_buckets[0].order_count if today_buckets else 0,
        )
