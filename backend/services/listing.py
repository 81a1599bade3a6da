"""Full product listing. Straight pass-through to the catalog, never cached."""

from errors import ListingUnavailableError
from models import Product
from services.catalog import CatalogClient, CatalogError


async def list_products(client: CatalogClient) -> list[Product]:
    try:
        return await client.fetch_all()
    except CatalogError as e:
        raise ListingUnavailableError() from e
