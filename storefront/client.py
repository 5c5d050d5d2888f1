"""
Async HTTP client for the bookstore API.

Error responses are raised as the same exceptions the API uses
(``NotFound``, ``Unauthorized``, ``ValidationError``, ``QueryFailure``,
``PaymentFailure``).
"""
import os
from decimal import Decimal

import httpx
import structlog

from shared.errors import error_for_status
from shared.security.dependencies import ADMIN_HEADER

from .filters import CatalogFilters

logger = structlog.get_logger(__name__)

API_URL = os.getenv("BOOKSTORE_API_URL", "http://localhost:5000")
# Same variable the API reads; unset means the client does not know the fee
DELIVERY_FEE = os.getenv("DELIVERY_FEE")


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("error") or body.get("detail") or body)
    return str(body)


class BookstoreClient:
    def __init__(self, base_url: str = API_URL, admin_password: str | None = None,
                 http: httpx.AsyncClient | None = None, timeout: float = 30.0,
                 delivery_fee: Decimal | None = None):
        self.admin_password = admin_password
        if delivery_fee is None and DELIVERY_FEE:
            delivery_fee = Decimal(DELIVERY_FEE)
        self.delivery_fee = delivery_fee
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        if self._owns_http:
            await self.http.aclose()

    def _admin_headers(self) -> dict[str, str]:
        return {ADMIN_HEADER: self.admin_password or ""}

    async def _request(self, method: str, path: str, **kwargs):
        resp = await self.http.request(method, path, **kwargs)
        if resp.is_error:
            message = _error_message(resp)
            logger.warning("api_request_failed", method=method, path=path, status=resp.status_code, error=message)
            raise error_for_status(resp.status_code, message)
        return resp.json()

    # Lookups
    async def get_grades(self) -> list[dict]:
        return await self._request("GET", "/grades")

    async def get_subjects(self) -> list[dict]:
        return await self._request("GET", "/subjects")

    async def get_categories(self) -> list[dict]:
        return await self._request("GET", "/categories")

    # Products
    async def list_products(self, filters: CatalogFilters | None = None) -> list[dict]:
        params = (filters or CatalogFilters()).to_params()
        return await self._request("GET", "/products", params=params)

    async def get_product(self, product_id: int) -> dict:
        return await self._request("GET", f"/products/{product_id}")

    async def upsert_product(self, product: dict) -> dict:
        body = await self._request("POST", "/admin/products", json=product, headers=self._admin_headers())
        return body["product"]

    async def update_product(self, product_id: int, product: dict) -> dict:
        return await self._request("PUT", f"/products/{product_id}", json=product, headers=self._admin_headers())

    # Checkout
    async def checkout(self, payload: dict) -> dict:
        return await self._request("POST", "/checkout", json=payload)

    # Orders
    async def list_orders(self) -> list[dict]:
        return await self._request("GET", "/orders", headers=self._admin_headers())
