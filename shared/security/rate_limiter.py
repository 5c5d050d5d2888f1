from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.config.settings import get_settings


def checkout_rate_limit() -> str:
    return get_settings().checkout_rate_limit


# Keyed by client address; there are no user accounts to key on
limiter = Limiter(key_func=get_remote_address)
