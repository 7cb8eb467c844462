from __future__ import annotations

import asyncio
import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence, TypeVar

from qrdine.api.error_handling import HANDLED_EXCEPTIONS, error_message
from qrdine.api.middleware.request_id import request_scope
from qrdine.application.dto.responses import (
    ApiResponse,
    CreateOrderResponse,
    DashboardStatsResponse,
    DeleteMenuItemResponse,
    MenuItemResponse,
    OrderResponse,
    OrderStatusResponse,
    PaymentResponse,
    RevenueDatumResponse,
    StaffSessionResponse,
    SubmitOrderResponse,
    TableValidationResponse,
)
from qrdine.application.ports.payment import PaymentGateway
from qrdine.application.ports.storage import KeyValueStore
from qrdine.application.use_cases.authorize_payment import AuthorizePayment
from qrdine.application.use_cases.cart import CartService
from qrdine.application.use_cases.get_order import GetOrder, GetOrderStatus
from qrdine.application.use_cases.menu_catalog import (
    AddMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListCategories,
    ListMenuItems,
    UpdateMenuItem,
)
from qrdine.application.use_cases.order_history import DateInput, GetOrderHistory, ListRecentOrders
from qrdine.application.use_cases.place_order import CreateOrder, OrderLineInput, SubmitOrder
from qrdine.application.use_cases.revenue_report import DashboardStats, GetRevenue
from qrdine.application.use_cases.table_session import (
    CurrentTable,
    StaffLogin,
    StaffLogout,
    StaffStatus,
    ValidateTable,
)
from qrdine.application.use_cases.update_order_status import UpdateOrderStatus
from qrdine.config import Settings
from qrdine.domain.common.ids import MenuItemId, OrderId
from qrdine.infrastructure.observability.otel import get_tracer
from qrdine.infrastructure.payment.simulated_gateway import SimulatedPaymentGateway
from qrdine.infrastructure.repositories.cart_repo import KeyValueCartRepository
from qrdine.infrastructure.repositories.menu_repo import KeyValueMenuRepository
from qrdine.infrastructure.repositories.order_repo import KeyValueOrderRepository
from qrdine.infrastructure.repositories.session_repo import KeyValueSessionRepository
from qrdine.infrastructure.storage.factory import build_key_value_store

logger = logging.getLogger("qrdine.api.service")

T = TypeVar("T")

# Simulated round-trip per operation, in milliseconds.
LATENCY_MS: dict[str, int] = {
    "validate_table": 500,
    "list_menu_items": 800,
    "list_categories": 800,
    "get_menu_item": 500,
    "add_menu_item": 800,
    "update_menu_item": 800,
    "delete_menu_item": 800,
    "create_order": 1000,
    "get_order": 500,
    "get_order_status": 500,
    "get_order_history": 800,
    "list_orders": 800,
    "update_order_status": 500,
    "authorize_payment": 1500,
    "get_revenue": 800,
    "dashboard_stats": 800,
    "login": 0,
    "logout": 0,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QrDineService:
    """Envelope-returning async entry point used by the page components.

    Every call waits out a fixed artificial latency, then runs one use case.
    Known failures come back as ``ApiResponse(success=False, error=...)``;
    anything else propagates.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        settings: Settings | None = None,
        payment_gateway: PaymentGateway | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._settings = settings or Settings.from_env()
        self._store = store if store is not None else build_key_value_store(self._settings)
        rng = rng or random.Random()

        menu_repository = KeyValueMenuRepository(self._store)
        order_repository = KeyValueOrderRepository(self._store)
        session_repository = KeyValueSessionRepository(self._store)
        self._cart_repository = KeyValueCartRepository(self._store)

        gateway = payment_gateway or SimulatedPaymentGateway(
            success_rate=self._settings.payment_success_rate,
            rng=rng,
        )
        self._authorize_payment = AuthorizePayment(gateway)

        self._list_menu_items = ListMenuItems(menu_repository)
        self._list_categories = ListCategories(menu_repository)
        self._get_menu_item = GetMenuItem(menu_repository)
        self._add_menu_item = AddMenuItem(menu_repository)
        self._update_menu_item = UpdateMenuItem(menu_repository)
        self._delete_menu_item = DeleteMenuItem(menu_repository)

        self._create_order = CreateOrder(order_repository, rng=rng, clock=clock)
        self._submit_order = SubmitOrder(
            order_repository,
            authorize_payment=self._authorize_payment,
            rng=rng,
            clock=clock,
        )
        self._get_order = GetOrder(order_repository)
        self._get_order_status = GetOrderStatus(order_repository)
        self._get_order_history = GetOrderHistory(order_repository)
        self._list_recent_orders = ListRecentOrders(order_repository)
        self._update_order_status = UpdateOrderStatus(
            order_repository,
            strict=self._settings.strict_transitions,
        )
        self._get_revenue = GetRevenue(order_repository)
        self._dashboard_stats = DashboardStats(order_repository, clock=clock)

        self._validate_table = ValidateTable(session_repository)
        self._current_table = CurrentTable(session_repository)
        self._staff_login = StaffLogin(session_repository, password=self._settings.staff_password)
        self._staff_logout = StaffLogout(session_repository)
        self._staff_status = StaffStatus(session_repository)

        self._tracer = get_tracer()

    async def _delay(self, operation: str) -> None:
        seconds = LATENCY_MS.get(operation, 0) / 1000 * self._settings.latency_scale
        await asyncio.sleep(seconds)

    async def _call(self, operation: str, fn: Callable[[], T]) -> ApiResponse[T]:
        with request_scope(), self._tracer.start_as_current_span(f"qrdine.{operation}") as span:
            started = time.perf_counter()
            await self._delay(operation)
            try:
                data = fn()
            except HANDLED_EXCEPTIONS as exc:
                span.set_attribute("qrdine.success", False)
                logger.info(
                    "operation_failed error=%s",
                    exc,
                    extra={
                        "operation": operation,
                        "success": False,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
                return ApiResponse.fail(error_message(exc))
            except Exception:
                logger.exception("operation_crashed", extra={"operation": operation})
                raise

            span.set_attribute("qrdine.success", True)
            logger.debug(
                "operation_completed",
                extra={
                    "operation": operation,
                    "success": True,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            return ApiResponse.ok(data)

    # Cart: local and synchronous.

    def open_cart(self) -> CartService:
        return CartService(self._cart_repository)

    # Table and staff session.

    async def validate_table(self, table_number: str) -> ApiResponse[TableValidationResponse]:
        return await self._call("validate_table", lambda: self._validate_table.execute(table_number))

    def current_table(self) -> str | None:
        return self._current_table.execute()

    async def login(self, password: str) -> ApiResponse[StaffSessionResponse]:
        return await self._call("login", lambda: self._staff_login.execute(password))

    async def logout(self) -> ApiResponse[StaffSessionResponse]:
        return await self._call("logout", self._staff_logout.execute)

    def is_staff_logged_in(self) -> bool:
        return self._staff_status.execute().loggedIn

    # Catalog.

    async def list_menu_items(self) -> ApiResponse[list[MenuItemResponse]]:
        return await self._call("list_menu_items", self._list_menu_items.execute)

    async def list_categories(self) -> ApiResponse[list[str]]:
        return await self._call("list_categories", self._list_categories.execute)

    async def get_menu_item(self, item_id: str) -> ApiResponse[MenuItemResponse]:
        return await self._call(
            "get_menu_item", lambda: self._get_menu_item.execute(MenuItemId(item_id))
        )

    async def add_menu_item(self, fields: Mapping[str, Any]) -> ApiResponse[MenuItemResponse]:
        return await self._call("add_menu_item", lambda: self._add_menu_item.execute(fields))

    async def update_menu_item(
        self,
        item_id: str,
        fields: Mapping[str, Any],
    ) -> ApiResponse[MenuItemResponse]:
        return await self._call(
            "update_menu_item",
            lambda: self._update_menu_item.execute(MenuItemId(item_id), fields),
        )

    async def delete_menu_item(self, item_id: str) -> ApiResponse[DeleteMenuItemResponse]:
        return await self._call(
            "delete_menu_item", lambda: self._delete_menu_item.execute(MenuItemId(item_id))
        )

    # Orders.

    async def create_order(
        self,
        table_number: str,
        items: Sequence[OrderLineInput],
    ) -> ApiResponse[CreateOrderResponse]:
        return await self._call(
            "create_order", lambda: self._create_order.execute(table_number, items)
        )

    async def submit_order(
        self,
        cart: CartService,
        table_number: str | None = None,
    ) -> ApiResponse[SubmitOrderResponse]:
        """Place the cart as an order and pay for it.

        The cart is cleared only after payment succeeds; a declined payment
        leaves the order ``cancelled`` and the cart intact for a retry.
        """
        with request_scope():
            table = table_number or self.current_table() or ""
            placed = await self._call(
                "create_order", lambda: self._submit_order.begin(table, cart.snapshot())
            )
            if not placed.success or placed.data is None:
                return ApiResponse.fail(placed.error or "")

            order = placed.data
            paid = await self._call("authorize_payment", lambda: self._submit_order.complete(order))
            if paid.success:
                cart.clear_cart()
            return paid

    async def get_order(self, order_id: str) -> ApiResponse[OrderResponse]:
        return await self._call("get_order", lambda: self._get_order.execute(OrderId(order_id)))

    async def get_order_status(self, order_id: str) -> ApiResponse[OrderStatusResponse]:
        return await self._call(
            "get_order_status", lambda: self._get_order_status.execute(OrderId(order_id))
        )

    async def get_order_history(
        self,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> ApiResponse[list[OrderResponse]]:
        return await self._call(
            "get_order_history",
            lambda: self._get_order_history.execute(start_date, end_date),
        )

    async def list_orders(self, status: str = "all") -> ApiResponse[list[OrderResponse]]:
        return await self._call("list_orders", lambda: self._list_recent_orders.execute(status))

    async def update_order_status(self, order_id: str, status: str) -> ApiResponse[OrderResponse]:
        return await self._call(
            "update_order_status",
            lambda: self._update_order_status.execute(OrderId(order_id), status),
        )

    # Payment.

    async def authorize_payment(self, order_id: str, amount: object) -> ApiResponse[PaymentResponse]:
        return await self._call(
            "authorize_payment",
            lambda: self._authorize_payment.execute(OrderId(order_id), amount),
        )

    # Revenue.

    async def get_revenue(
        self,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> ApiResponse[list[RevenueDatumResponse]]:
        return await self._call(
            "get_revenue", lambda: self._get_revenue.execute(start_date, end_date)
        )

    async def dashboard_stats(self) -> ApiResponse[DashboardStatsResponse]:
        return await self._call("dashboard_stats", self._dashboard_stats.execute)
