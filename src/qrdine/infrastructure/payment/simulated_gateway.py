from __future__ import annotations

import logging
import random
import time
from decimal import Decimal

from qrdine.application.ports.payment import PaymentGateway, PaymentResult
from qrdine.domain.common.ids import OrderId, TransactionId

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_RATE = 0.95


class SimulatedPaymentGateway(PaymentGateway):
    """Stand-in for a card processor: no money moves.

    Each call is an independent trial that succeeds with ``success_rate``,
    so retrying a declined authorization may succeed.
    """

    def __init__(
        self,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        rng: random.Random | None = None,
    ) -> None:
        self._success_rate = success_rate
        self._rng = rng or random.Random()

    def authorize(self, order_id: OrderId, amount: Decimal) -> PaymentResult:
        if self._rng.random() >= self._success_rate:
            logger.info("payment_declined order_id=%s amount=%s", order_id, amount)
            return PaymentResult(success=False, error="declined")

        transaction_id = TransactionId(
            f"TRX{int(time.time() * 1000)}{self._rng.randrange(1000)}"
        )
        logger.info(
            "payment_authorized order_id=%s amount=%s transaction_id=%s",
            order_id,
            amount,
            transaction_id,
        )
        return PaymentResult(success=True, transaction_id=transaction_id)
