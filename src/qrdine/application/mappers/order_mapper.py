from __future__ import annotations

from qrdine.application.dto.responses import (
    OrderResponse,
    OrderStatusResponse,
    RevenueDatumResponse,
)
from qrdine.application.mappers.menu_mapper import to_cart_item_response
from qrdine.domain.order.entities import Order
from qrdine.domain.revenue.entities import RevenueDatum


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.order_id),
        tableNumber=str(order.table_number),
        items=[to_cart_item_response(entry) for entry in order.items],
        totalAmount=order.total_amount,
        status=order.status.value,
        progress=order.progress,
        createdAt=order.created_at,
        estimatedTime=order.estimated_time,
    )


def to_order_status_response(order: Order) -> OrderStatusResponse:
    return OrderStatusResponse(
        status=order.status.value,
        progress=order.progress,
        estimatedTime=order.estimated_time,
    )


def to_revenue_datum_response(datum: RevenueDatum) -> RevenueDatumResponse:
    return RevenueDatumResponse(
        date=datum.date,
        revenue=datum.revenue,
        orderCount=datum.order_count,
    )
