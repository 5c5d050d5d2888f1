from dataclasses import dataclass
from decimal import Decimal

import structlog

from shared.errors import ValidationError
from shared.phone import normalize_phone

from .cart import Cart
from .client import BookstoreClient

logger = structlog.get_logger(__name__)


@dataclass
class CheckoutForm:
    name: str = ""
    phone: str = ""
    location: str = ""
    delivery_option: str = "pickup"

    def validate(self):
        if not self.name.strip() or not normalize_phone(self.phone):
            raise ValidationError("Please fill name and phone")
        if self.delivery_option not in ("pickup", "delivery"):
            raise ValidationError(f"Unknown delivery option: {self.delivery_option}")
        if self.delivery_option == "delivery" and not self.location.strip():
            raise ValidationError("Please fill the delivery location")


def build_checkout_payload(cart: Cart, form: CheckoutForm, delivery_fee: Decimal | None = None) -> dict:
    """Assemble the checkout body.

    ``amount`` lets the API cross-check the total. A delivery total depends
    on the deployment's fee, so it is only sent when that fee is known.
    """
    payload = {
        "customer_name": form.name.strip(),
        "phone": normalize_phone(form.phone),
        "location": form.location.strip() or None,
        "delivery_option": form.delivery_option,
        "items": cart.to_order_items(),
    }
    if form.delivery_option == "pickup":
        payload["amount"] = str(cart.total)
    elif delivery_fee is not None:
        payload["amount"] = str(cart.grand_total(form.delivery_option, delivery_fee))
    return payload


async def submit_checkout(client: BookstoreClient, cart: Cart, form: CheckoutForm) -> dict:
    """Place an order for the cart's contents.

    The cart is cleared only after the API confirms the order; on any
    failure the exception propagates and the cart is left untouched for
    a retry.
    """
    form.validate()
    if not len(cart):
        raise ValidationError("Cart is empty")

    result = await client.checkout(build_checkout_payload(cart, form, client.delivery_fee))
    logger.info("order_placed", order_id=result["order_id"])
    cart.clear()
    return result
