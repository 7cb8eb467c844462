from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from qrdine.domain.common.ids import OrderId, TransactionId


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    transaction_id: TransactionId | None = None
    error: str | None = None


class PaymentGateway(Protocol):
    def authorize(self, order_id: OrderId, amount: Decimal) -> PaymentResult: ...
