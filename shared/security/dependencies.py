from fastapi import Depends
from fastapi.security import APIKeyHeader

from shared.config.settings import Settings, get_settings
from shared.errors import Unauthorized
from shared.observability.metrics import bookstore_admin_auth_failures_total

from .admin_secret import verify_admin_secret

ADMIN_HEADER = "X-Admin-Password"

# Defines the expected admin header
admin_password_header = APIKeyHeader(name=ADMIN_HEADER, auto_error=False)


async def require_admin(
    password: str | None = Depends(admin_password_header),
    settings: Settings = Depends(get_settings),
) -> bool:
    """Dependency gating admin-only routes behind the shared secret."""
    if not verify_admin_secret(password, settings.admin_password):
        bookstore_admin_auth_failures_total.inc()
        raise Unauthorized("Unauthorized: Invalid password")
    return True
