from pydantic import BaseModel


class PaymentAcknowledgement(BaseModel):
    """Acceptance of an STK push request, as a mobile-money gateway reports it."""
    merchant_request_id: str
    checkout_request_id: str
    response_code: str
    response_description: str
    customer_message: str
