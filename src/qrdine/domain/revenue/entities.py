from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timezone
from decimal import Decimal
from typing import Iterable

from qrdine.domain.common.money import ZERO
from qrdine.domain.order.entities import NON_REVENUE_STATUSES, Order


@dataclass(frozen=True)
class RevenueDatum:
    date: date
    revenue: Decimal
    order_count: int


def order_day(order: Order) -> date:
    created_at = order.created_at
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return created_at.date()


def aggregate_daily_revenue(orders: Iterable[Order]) -> list[RevenueDatum]:
    """Bucket revenue-bearing orders by UTC creation day.

    Days without orders are omitted rather than zero-filled.
    """
    revenue: dict[date, Decimal] = {}
    counts: dict[date, int] = {}
    for order in orders:
        if order.status in NON_REVENUE_STATUSES:
            continue
        day = order_day(order)
        revenue[day] = revenue.get(day, ZERO) + order.total_amount
        counts[day] = counts.get(day, 0) + 1

    return [
        RevenueDatum(date=day, revenue=revenue[day], order_count=counts[day])
        for day in sorted(revenue)
    ]
