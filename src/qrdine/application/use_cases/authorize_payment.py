from __future__ import annotations

from decimal import Decimal

from qrdine.application.dto.responses import PaymentResponse
from qrdine.application.metrics.order_lifecycle import record_payment
from qrdine.application.ports.payment import PaymentGateway, PaymentResult
from qrdine.domain.common.ids import OrderId
from qrdine.domain.common.money import parse_price


class PaymentDeclinedError(Exception):
    pass


class InvalidPaymentAmountError(Exception):
    pass


class AuthorizePayment:
    def __init__(self, payment_gateway: PaymentGateway) -> None:
        self._payment_gateway = payment_gateway

    def authorize(self, order_id: OrderId, amount: object) -> PaymentResult:
        try:
            normalized_amount: Decimal = parse_price(amount)
        except ValueError as exc:
            raise InvalidPaymentAmountError(str(exc)) from exc

        result = self._payment_gateway.authorize(order_id, normalized_amount)
        record_payment(result.success)
        if not result.success or result.transaction_id is None:
            raise PaymentDeclinedError(
                f"payment for order {order_id} declined: {result.error or 'unknown'}"
            )
        return result

    def execute(self, order_id: OrderId, amount: object) -> PaymentResponse:
        result = self.authorize(order_id, amount)
        return PaymentResponse(transactionId=str(result.transaction_id), success=True)
