import re

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: str | None) -> str:
    """Strip everything except digits, e.g. ``"+254 712-345 678"`` -> ``"254712345678"``."""
    return _NON_DIGITS.sub("", phone or "")
