"""Product routes: full listing and two-product price comparison."""

import logging
import re

from fastapi import APIRouter, Depends, Query

from errors import InvalidProductIDError
from models import Product
from services.catalog import CatalogClient, get_catalog
from services.comparison import ComparisonService, get_comparison_service
from services.listing import list_products

logger = logging.getLogger(__name__)

router = APIRouter()

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)

# Product IDs are 64-bit signed integers upstream
_MAX_ID_CHARS = 20
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def _parse_product_id(value: str | None, param: str) -> int:
    """Parse a query-string product ID, rejecting anything that is not a plain integer."""
    if value is None or len(value) > _MAX_ID_CHARS or not _INT_RE.fullmatch(value):
        raise InvalidProductIDError(param)
    try:
        product_id = int(value)
    except ValueError:
        raise InvalidProductIDError(param) from None
    if not _ID_MIN <= product_id <= _ID_MAX:
        raise InvalidProductIDError(param)
    return product_id


@router.get("/products")
async def products(client: CatalogClient = Depends(get_catalog)) -> list[Product]:
    """Every product in the catalog, unmodified. Not cached."""
    return await list_products(client)


@router.get("/compare")
async def compare(
    product_id_1: str | None = Query(None, alias="productID1"),
    product_id_2: str | None = Query(None, alias="productID2"),
    service: ComparisonService = Depends(get_comparison_service),
) -> dict:
    """Compare two products' prices. `winner` is the pricier ID, or "" on a tie."""
    id_1 = _parse_product_id(product_id_1, "productID1")
    id_2 = _parse_product_id(product_id_2, "productID2")

    result = await service.compare(id_1, id_2)
    logger.info("Compared %d vs %d: winner=%s", id_1, id_2, result.winner_id)

    return {
        "price": {
            "productOne": result.price_a,
            "productTwo": result.price_b,
            "winner": "" if result.winner_id is None else str(result.winner_id),
        }
    }
