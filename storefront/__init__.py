from .cart import Cart, CartLine
from .checkout import CheckoutForm, build_checkout_payload, submit_checkout
from .client import BookstoreClient
from .filters import CatalogFilters

__all__ = [
    "Cart",
    "CartLine",
    "CatalogFilters",
    "BookstoreClient",
    "CheckoutForm",
    "build_checkout_payload",
    "submit_checkout",
]
