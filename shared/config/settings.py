"""
Runtime configuration for the bookstore API.

Values come from the environment (a local .env is loaded first). The
Settings object is built once and handed to routes through the
get_settings dependency so tests can swap it out.
"""
import os
import warnings
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DELIVERY_FEE = Decimal("200")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    host = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
    port = os.getenv("POSTGRES_PORT", "5432")
    name = os.getenv("POSTGRES_DB", "bookstore")
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


def _admin_password() -> str:
    password = os.getenv("ADMIN_PASSWORD", "")
    if not password:
        warnings.warn(
            "ADMIN_PASSWORD is not set. Using an insecure default. "
            "Set this env var in production!",
            stacklevel=2,
        )
        password = "insecure-default-change-me"
    return password


@dataclass(frozen=True)
class Settings:
    database_url: str
    admin_password: str
    allowed_origins: tuple[str, ...] = ("*",)
    port: int = 5000
    delivery_fee: Decimal = DEFAULT_DELIVERY_FEE
    checkout_rate_limit: str = "10/minute"
    otlp_endpoint: str | None = None
    sql_echo: bool = False


@lru_cache
def get_settings() -> Settings:
    origins = os.getenv("ALLOWED_ORIGIN", "*")
    return Settings(
        database_url=_database_url(),
        admin_password=_admin_password(),
        allowed_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        port=int(os.getenv("PORT", "5000")),
        delivery_fee=Decimal(os.getenv("DELIVERY_FEE", str(DEFAULT_DELIVERY_FEE))),
        checkout_rate_limit=os.getenv("CHECKOUT_RATE_LIMIT", "10/minute"),
        otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
        sql_echo=os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes"),
    )
