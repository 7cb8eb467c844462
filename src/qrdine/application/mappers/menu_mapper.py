from __future__ import annotations

from qrdine.application.dto.requests import CartLineRequest
from qrdine.application.dto.responses import CartItemResponse, MenuItemResponse
from qrdine.domain.cart.entities import CartItem
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=str(item.item_id),
        name=item.name,
        description=item.description,
        price=item.price,
        image=item.image,
        category=item.category,
        tags=list(item.tags),
        popular=item.popular,
        available=item.available,
    )


def to_cart_item_response(entry: CartItem) -> CartItemResponse:
    return CartItemResponse(
        **to_menu_item_response(entry.item).model_dump(),
        quantity=entry.quantity,
    )


def cart_item_from_request(line: CartLineRequest) -> CartItem:
    return CartItem(
        item=MenuItem(
            item_id=MenuItemId(line.id),
            name=line.name,
            description=line.description,
            price=line.price,
            image=line.image,
            category=line.category,
            tags=tuple(line.tags or ()),
            popular=line.popular,
            available=line.available,
        ),
        quantity=line.quantity,
    )
