from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from qrdine.application.dto.requests import AddMenuItemRequest, UpdateMenuItemRequest
from qrdine.application.dto.responses import DeleteMenuItemResponse, MenuItemResponse
from qrdine.application.mappers.menu_mapper import to_menu_item_response
from qrdine.application.metrics.order_lifecycle import record_menu_mutation
from qrdine.application.ports.repositories import MenuRepository
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import MenuItem, categories, next_menu_item_id

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = frozenset({"tags", "popular"})


class MenuItemNotFoundError(Exception):
    pass


class MenuValidationError(Exception):
    pass


def describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'value'}: {error['msg']}"
        for error in exc.errors()
    )


class ListMenuItems:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(self) -> list[MenuItemResponse]:
        return [to_menu_item_response(item) for item in self._menu_repository.list()]


class ListCategories:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(self) -> list[str]:
        return categories(self._menu_repository.list())


class GetMenuItem:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(self, item_id: MenuItemId) -> MenuItemResponse:
        item = self._menu_repository.get(item_id)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        return to_menu_item_response(item)


class AddMenuItem:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(self, fields: Mapping[str, Any] | AddMenuItemRequest) -> MenuItemResponse:
        try:
            request_dto = AddMenuItemRequest.model_validate(fields)
        except ValidationError as exc:
            raise MenuValidationError(describe_validation_error(exc)) from exc

        items = self._menu_repository.list()
        item = MenuItem(
            item_id=next_menu_item_id(items),
            name=request_dto.name,
            description=request_dto.description,
            price=request_dto.price,
            image=request_dto.image,
            category=request_dto.category,
            tags=tuple(request_dto.tags or ()),
            popular=request_dto.popular,
            available=True,
        )
        self._menu_repository.add(item)
        record_menu_mutation("add")
        logger.info("menu_item_added item_id=%s", item.item_id)
        return to_menu_item_response(item)


class UpdateMenuItem:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(
        self,
        item_id: MenuItemId,
        fields: Mapping[str, Any] | UpdateMenuItemRequest,
    ) -> MenuItemResponse:
        try:
            request_dto = UpdateMenuItemRequest.model_validate(fields)
        except ValidationError as exc:
            raise MenuValidationError(describe_validation_error(exc)) from exc

        current = self._menu_repository.get(item_id)
        if current is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")

        changes = {
            name: value
            for name, value in request_dto.model_dump(exclude_unset=True).items()
            if value is not None or name in _NULLABLE_FIELDS
        }
        try:
            updated = current.with_updates(**changes)
        except (TypeError, ValueError) as exc:
            raise MenuValidationError(str(exc)) from exc

        self._menu_repository.update(updated)
        record_menu_mutation("update")
        logger.info("menu_item_updated item_id=%s fields=%s", item_id, sorted(changes))
        return to_menu_item_response(updated)


class DeleteMenuItem:
    def __init__(self, menu_repository: MenuRepository) -> None:
        self._menu_repository = menu_repository

    def execute(self, item_id: MenuItemId) -> DeleteMenuItemResponse:
        if self._menu_repository.get(item_id) is not None:
            self._menu_repository.delete(item_id)
            record_menu_mutation("delete")
            logger.info("menu_item_deleted item_id=%s", item_id)
        return DeleteMenuItemResponse(success=True)
