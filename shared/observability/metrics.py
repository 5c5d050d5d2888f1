from prometheus_client import Counter, Histogram

# Business Metrics
bookstore_checkout_total = Counter(
    "bookstore_checkout_total",
    "Total checkouts processed",
    ["status"]  # Labels: 'success', 'rejected', 'failed', 'payment_failed'
)

bookstore_checkout_duration_seconds = Histogram(
    "bookstore_checkout_duration_seconds",
    "Checkout duration in seconds"
)

bookstore_order_rollback_total = Counter(
    "bookstore_order_rollback_total",
    "Order transactions rolled back",
    ["stage"]  # Labels: 'header', 'items'
)

bookstore_catalog_queries_total = Counter(
    "bookstore_catalog_queries_total",
    "Catalog listing queries executed",
    ["outcome"]  # Labels: 'ok', 'empty', 'error'
)

bookstore_admin_auth_failures_total = Counter(
    "bookstore_admin_auth_failures_total",
    "Admin requests rejected for a bad or missing password"
)
