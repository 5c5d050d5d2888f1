from .admin_secret import verify_admin_secret
from .dependencies import ADMIN_HEADER, require_admin
from .rate_limiter import checkout_rate_limit, limiter

__all__ = [
    "ADMIN_HEADER",
    "verify_admin_secret",
    "require_admin",
    "checkout_rate_limit",
    "limiter",
]
