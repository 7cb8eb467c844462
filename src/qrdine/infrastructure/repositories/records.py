from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import MenuItemId, OrderId, TableId
from qrdine.domain.common.money import parse_price, to_json_number
from qrdine.domain.menu.entities import MenuItem
from qrdine.domain.order.entities import Order, OrderStatus


def menu_item_to_record(item: MenuItem) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": str(item.item_id),
        "name": item.name,
        "description": item.description,
        "price": to_json_number(item.price),
        "image": item.image,
        "category": item.category,
    }
    if item.tags:
        record["tags"] = list(item.tags)
    if item.popular is not None:
        record["popular"] = item.popular
    record["available"] = item.available
    return record


def menu_item_from_record(record: dict[str, Any]) -> MenuItem:
    tags = record.get("tags") or ()
    if isinstance(tags, str):
        raise TypeError("tags must be a list")
    return MenuItem(
        item_id=MenuItemId(str(record["id"])),
        name=record["name"],
        description=record.get("description") or "",
        price=parse_price(record["price"]),
        image=record.get("image") or "",
        category=record["category"],
        tags=tuple(str(tag) for tag in tags),
        popular=record.get("popular"),
        available=bool(record.get("available", True)),
    )


def cart_item_to_record(entry: CartItem) -> dict[str, Any]:
    record = menu_item_to_record(entry.item)
    record["quantity"] = entry.quantity
    return record


def cart_item_from_record(record: dict[str, Any]) -> CartItem:
    quantity = record["quantity"]
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise TypeError("quantity must be an integer")
    return CartItem(item=menu_item_from_record(record), quantity=quantity)


def parse_timestamp(raw: str) -> datetime:
    value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def order_to_record(order: Order) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": str(order.order_id),
        "tableNumber": str(order.table_number),
        "items": [cart_item_to_record(entry) for entry in order.items],
        "totalAmount": to_json_number(order.total_amount),
        "status": order.status.value,
        "createdAt": order.created_at.isoformat(),
    }
    if order.estimated_time is not None:
        record["estimatedTime"] = order.estimated_time
    return record


def order_from_record(record: dict[str, Any]) -> Order:
    return Order(
        order_id=OrderId(str(record["id"])),
        table_number=TableId(str(record["tableNumber"])),
        items=tuple(cart_item_from_record(row) for row in record["items"]),
        total_amount=parse_price(record["totalAmount"]),
        status=OrderStatus(record["status"]),
        created_at=parse_timestamp(record["createdAt"]),
        estimated_time=record.get("estimatedTime"),
    )
