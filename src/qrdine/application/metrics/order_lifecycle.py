from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from qrdine.domain.order.entities import Order, OrderStatus

ORDERS_CREATED_TOTAL = Counter(
    "qrdine_orders_created_total",
    "Total number of orders appended to the ledger by initial status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "qrdine_order_transition_total",
    "Total number of order status changes.",
    ["from", "to"],
)

ORDER_TIME_TO_STATUS_SECONDS = Histogram(
    "qrdine_order_time_to_status_seconds",
    "Time between order creation and a status change.",
    ["status"],
)

PAYMENT_AUTHORIZATIONS_TOTAL = Counter(
    "qrdine_payment_authorizations_total",
    "Total number of payment authorization attempts by outcome.",
    ["outcome"],
)

CART_MUTATIONS_TOTAL = Counter(
    "qrdine_cart_mutations_total",
    "Total number of cart mutations by operation.",
    ["operation"],
)

MENU_MUTATIONS_TOTAL = Counter(
    "qrdine_menu_mutations_total",
    "Total number of catalog mutations by operation.",
    ["operation"],
)

REVENUE_QUERIES_TOTAL = Counter(
    "qrdine_revenue_queries_total",
    "Total number of revenue report queries.",
)


def record_order_created(order: Order) -> None:
    ORDERS_CREATED_TOTAL.labels(status=order.status.value).inc()


def record_transition(order: Order, from_status: OrderStatus, now: datetime | None = None) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": order.status.value}).inc()
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_STATUS_SECONDS.labels(status=order.status.value).observe(
        max((current - order.created_at).total_seconds(), 0.0)
    )


def record_payment(success: bool) -> None:
    PAYMENT_AUTHORIZATIONS_TOTAL.labels(outcome="authorized" if success else "declined").inc()


def record_cart_mutation(operation: str) -> None:
    CART_MUTATIONS_TOTAL.labels(operation=operation).inc()


def record_menu_mutation(operation: str) -> None:
    MENU_MUTATIONS_TOTAL.labels(operation=operation).inc()


def record_revenue_query() -> None:
    REVENUE_QUERIES_TOTAL.inc()
