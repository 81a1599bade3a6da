"""HTTP client for the upstream product catalog (fakestoreapi.com by default).

Pure I/O: one best-effort request per call, no caching and no retries.
Every failure (transport error, timeout, non-2xx status, a body that is not
JSON or does not match the expected shape) surfaces as ``CatalogError``.
"""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from config import settings
from models import Product, ProductSummary

logger = logging.getLogger(__name__)

_product_list = TypeAdapter(list[Product])


class CatalogError(Exception):
    """The catalog could not deliver a usable response."""


class CatalogClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def _get_json(self, path: str):
        logger.info("Fetching %s%s", self.base_url, path)
        try:
            async with self._client() as client:
                resp = await client.get(path)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as e:
            raise CatalogError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            # Unknown IDs come back as 200 with an empty body
            raise CatalogError(f"GET {path} returned a non-JSON body") from e

    async def fetch_by_id(self, product_id: int) -> ProductSummary:
        """Fetch one product's id and price."""
        data = await self._get_json(f"/products/{product_id}")
        try:
            return ProductSummary.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Malformed product payload for id {product_id}") from e

    async def fetch_all(self) -> list[Product]:
        """Fetch the full product collection."""
        data = await self._get_json("/products")
        try:
            return _product_list.validate_python(data)
        except ValidationError as e:
            raise CatalogError("Malformed product list payload") from e


catalog = CatalogClient(settings.catalog_base_url, timeout=settings.catalog_timeout_seconds)


def get_catalog() -> CatalogClient:
    return catalog
