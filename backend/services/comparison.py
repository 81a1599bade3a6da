"""Price comparison between two products, read through the recency cache."""

import logging
from typing import NamedTuple

from errors import UpstreamFetchError
from models import ProductSummary
from services.cache import RecencyCache, product_cache
from services.catalog import CatalogClient, CatalogError, catalog

logger = logging.getLogger(__name__)


class Comparison(NamedTuple):
    price_a: float
    price_b: float
    winner_id: int | None  # None on a tie


class ComparisonService:
    def __init__(self, cache: RecencyCache[int, ProductSummary], client: CatalogClient):
        self.cache = cache
        self.client = client

    async def lookup(self, product_id: int) -> ProductSummary:
        """Return the product from cache, fetching and caching it on a miss.

        The cache lock is never held across the upstream call: ``get`` and
        ``put`` each lock briefly, the fetch runs in between.
        """
        cached = self.cache.get(product_id)
        if cached is not None:
            logger.debug("Cache hit for product %d", product_id)
            return cached

        logger.debug("Cache miss for product %d", product_id)
        try:
            summary = await self.client.fetch_by_id(product_id)
        except CatalogError as e:
            raise UpstreamFetchError(product_id) from e

        self.cache.put(product_id, summary)
        return summary

    async def compare(self, id_a: int, id_b: int) -> Comparison:
        """Compare two products' prices. The strictly higher price wins; equal is a tie."""
        a = await self.lookup(id_a)
        b = await self.lookup(id_b)

        # Winner is reported by requested id, not the upstream record's id field
        if a.price > b.price:
            winner = id_a
        elif b.price > a.price:
            winner = id_b
        else:
            winner = None
        return Comparison(price_a=a.price, price_b=b.price, winner_id=winner)


comparison_service = ComparisonService(product_cache, catalog)


def get_comparison_service() -> ComparisonService:
    return comparison_service
