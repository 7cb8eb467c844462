from __future__ import annotations

from qrdine.application.ports.storage import StorageUnavailableError
from qrdine.application.use_cases.authorize_payment import (
    InvalidPaymentAmountError,
    PaymentDeclinedError,
)
from qrdine.application.use_cases.get_order import OrderNotFoundError
from qrdine.application.use_cases.menu_catalog import MenuItemNotFoundError, MenuValidationError
from qrdine.application.use_cases.order_history import (
    InvalidDateRangeError,
    InvalidOrderFilterError,
)
from qrdine.application.use_cases.place_order import OrderValidationError
from qrdine.application.use_cases.table_session import InvalidStaffPasswordError
from qrdine.application.use_cases.update_order_status import (
    InvalidOrderStatusError,
    InvalidOrderTransitionError,
)

# (exception, user-facing message, whether to append the exception detail)
ERROR_MESSAGES: list[tuple[type[Exception], str, bool]] = [
    (MenuItemNotFoundError, "菜品不存在", False),
    (MenuValidationError, "菜品信息无效", True),
    (OrderNotFoundError, "订单不存在", False),
    (OrderValidationError, "订单信息无效", True),
    (InvalidOrderStatusError, "无效的订单状态", True),
    (InvalidOrderFilterError, "无效的订单状态", True),
    (InvalidOrderTransitionError, "不允许的订单状态变更", True),
    (InvalidDateRangeError, "无效的日期范围", True),
    (PaymentDeclinedError, "支付处理失败，请重试", False),
    (InvalidPaymentAmountError, "无效的支付金额", True),
    (InvalidStaffPasswordError, "密码错误", False),
    (StorageUnavailableError, "存储服务暂不可用", False),
]

HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = tuple(exc_cls for exc_cls, _, _ in ERROR_MESSAGES)


def error_message(exc: Exception) -> str:
    for exc_cls, message, with_detail in ERROR_MESSAGES:
        if isinstance(exc, exc_cls):
            detail = str(exc)
            return f"{message}: {detail}" if with_detail and detail else message
    raise TypeError(f"no error message registered for {type(exc).__name__}") from exc
