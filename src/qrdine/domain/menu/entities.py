from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Iterable

from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.common.money import is_whole_cents

MENU_ITEM_ID_PREFIX = "dish-"


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    description: str
    price: Decimal
    image: str
    category: str
    tags: tuple[str, ...] = field(default_factory=tuple)
    popular: bool | None = None
    available: bool = True

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if not is_whole_cents(self.price):
            raise ValueError("price must have at most 2 decimal places")

    def with_updates(self, **changes: Any) -> MenuItem:
        changes.pop("item_id", None)
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"] or ())
        return replace(self, **changes)


def menu_item_id_for(position: int) -> MenuItemId:
    return MenuItemId(f"{MENU_ITEM_ID_PREFIX}{position:03d}")


def next_menu_item_id(items: list[MenuItem]) -> MenuItemId:
    """Id for a newly added item: count + 1, bumped past ids already taken."""
    taken = {item.item_id for item in items}
    position = len(items) + 1
    candidate = menu_item_id_for(position)
    while candidate in taken:
        position += 1
        candidate = menu_item_id_for(position)
    return candidate


def categories(items: Iterable[MenuItem]) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item.category, None)
    return list(seen)


def _image(prompt: str, sign: str) -> str:
    return (
        "https://space.coze.cn/api/coze_space/gen_image?image_size=square"
        f"&prompt={prompt}%20Chinese%20food%20dish%20photo&sign={sign}"
    )


DEFAULT_MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem(
        item_id=MenuItemId("dish-001"),
        name="宫保鸡丁",
        description="传统川菜，鸡肉鲜嫩，花生香脆，微辣可口",
        price=Decimal("48"),
        image=_image("Kung%20Pao%20Chicken", "7cd760f60829d219b0f92819249cf621"),
        category="热菜",
        tags=("川菜", "招牌"),
        popular=True,
    ),
    MenuItem(
        item_id=MenuItemId("dish-002"),
        name="鱼香肉丝",
        description="经典川菜，肉丝滑嫩，配菜丰富，酸甜可口",
        price=Decimal("42"),
        image=_image("Yuxiang%20Shredded%20Pork", "5d291d0babbf506f5ef683e6d075aea7"),
        category="热菜",
        tags=("川菜",),
    ),
    MenuItem(
        item_id=MenuItemId("dish-003"),
        name="北京烤鸭",
        description="招牌菜，皮脆肉嫩，搭配葱丝、黄瓜和甜面酱",
        price=Decimal("168"),
        image=_image("Peking%20Duck", "f3eedeed3d5bfb0827892f312f8a9ab1"),
        category="招牌菜",
        tags=("北京菜", "招牌"),
        popular=True,
    ),
    MenuItem(
        item_id=MenuItemId("dish-004"),
        name="蒜蓉西兰花",
        description="清爽素菜，西兰花脆嫩，蒜香浓郁",
        price=Decimal("32"),
        image=_image("Garlic%20Broccoli", "d0a51223d7eaf3f26e76b58dfe1026bf"),
        category="素菜",
        tags=("健康", "素食"),
    ),
    MenuItem(
        item_id=MenuItemId("dish-005"),
        name="担担面",
        description="四川传统面食，麻辣鲜香，面条劲道",
        price=Decimal("28"),
        image=_image("Dan%20Dan%20Noodles", "2f40c6f444e15fe282eb59f6c72dfcf5"),
        category="主食",
        tags=("川菜", "面食"),
    ),
    MenuItem(
        item_id=MenuItemId("dish-006"),
        name="水果拼盘",
        description="新鲜时令水果，营养丰富，清爽解腻",
        price=Decimal("38"),
        image=_image("Fruit%20Platter", "281ad9df2d3fd3ce2c1dea949288070f"),
        category="甜品",
        tags=("健康", "甜品"),
    ),
)
