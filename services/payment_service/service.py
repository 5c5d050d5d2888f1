import uuid
from decimal import Decimal

import structlog

from .schemas import PaymentAcknowledgement

logger = structlog.get_logger(__name__)


class PaymentError(Exception):
    """The gateway refused or could not accept the payment request."""


class PaymentService:
    @staticmethod
    async def request_payment(order_id: int, phone: str, amount: Decimal) -> PaymentAcknowledgement:
        # Simulated STK push; no gateway is called
        ack = PaymentAcknowledgement(
            merchant_request_id=f"MR{uuid.uuid4().hex[:16]}",
            checkout_request_id=f"CR{uuid.uuid4().hex[:16]}",
            response_code="0",
            response_description="Success. Request accepted for processing",
            customer_message="Success. Request accepted for processing",
        )
        logger.info(
            "stk_push_accepted",
            order_id=order_id,
            amount=str(amount),
            checkout_request_id=ack.checkout_request_id,
        )
        return ack
