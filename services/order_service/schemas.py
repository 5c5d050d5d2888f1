from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from services.payment_service.schemas import PaymentAcknowledgement

DeliveryOption = Literal["pickup", "delivery"]


class CheckoutItem(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)  # unit price captured when added to the cart


class CheckoutRequest(BaseModel):
    customer_name: str
    phone: str
    location: str | None = None
    delivery_option: DeliveryOption = "pickup"
    items: list[CheckoutItem]
    # Optional client-computed grand total; checked against the server's
    amount: Decimal | None = None


class CheckoutResponse(BaseModel):
    success: bool = True
    order_id: int
    payment_acknowledgement: PaymentAcknowledgement


class OrderItemResponse(BaseModel):
    product_id: int
    title: str | None
    quantity: int
    price: Decimal


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    phone: str
    location: str | None
    delivery_option: str
    total_amount: Decimal
    status: str
    created_at: datetime
    items: list[OrderItemResponse] = []

    class Config:
        from_attributes = True
