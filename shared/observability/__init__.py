from .setup import setup_observability
from .metrics import (
    bookstore_checkout_total,
    bookstore_checkout_duration_seconds,
    bookstore_order_rollback_total,
    bookstore_catalog_queries_total,
    bookstore_admin_auth_failures_total,
)
