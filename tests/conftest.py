"""Pytest configuration for test suite.

Puts ``backend/`` on ``sys.path`` so the flat imports the service uses
(``from config import settings``) resolve regardless of the working
directory pytest chooses, and provides a fake upstream catalog.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest


def _ensure_backend_on_syspath() -> None:
    backend = Path(__file__).resolve().parents[1] / "backend"
    backend_str = str(backend)
    if backend_str not in sys.path:
        # Prepend to prefer local sources over site-packages
        sys.path.insert(0, backend_str)


_ensure_backend_on_syspath()

CATALOG_URL = "https://catalog.test"


def make_product(product_id: int, price: float) -> Dict[str, Any]:
    """A full catalog record shaped like the upstream's, extra fields included."""
    return {
        "id": product_id,
        "title": f"Product {product_id}",
        "price": price,
        "description": f"Description of product {product_id}",
        "category": "electronics",
        "image": f"https://catalog.test/img/{product_id}.jpg",
        "rating": {"rate": 4.1, "count": 120},
    }


class FakeCatalog:
    """In-memory stand-in for the catalog API, served through httpx.MockTransport.

    Unknown product IDs answer 200 with an empty body, as the real catalog does.
    """

    def __init__(self, products: List[Dict[str, Any]], failing: set[int] | None = None) -> None:
        self.products = {p["id"]: p for p in products}
        self.failing = failing or set()
        self.list_fails = False
        self.requests: List[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path == "/products":
            if self.list_fails:
                return httpx.Response(502, text="bad gateway")
            return httpx.Response(200, json=list(self.products.values()))

        product_id = int(path.rsplit("/", 1)[-1])
        if product_id in self.failing:
            return httpx.Response(503, text="unavailable")
        if product_id not in self.products:
            return httpx.Response(200, content=b"")
        return httpx.Response(200, json=self.products[product_id])

    def fetches_of(self, product_id: int) -> int:
        return self.requests.count(f"/products/{product_id}")

    def client(self):
        from services.catalog import CatalogClient

        return CatalogClient(CATALOG_URL, timeout=5, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog([make_product(1, 10.0), make_product(2, 20.0), make_product(3, 20.0)])


@pytest.fixture(autouse=True)
def reset_product_cache():
    """Clear the process-wide cache so tests never see each other's entries."""
    from services.cache import product_cache

    product_cache.clear()
    yield
    product_cache.clear()
