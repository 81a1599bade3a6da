"""Health and readiness check routes."""

from fastapi import APIRouter

from config import settings
from services.cache import product_cache

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "product-compare-api", "commit": settings.git_sha}


@router.get("/health")
async def health() -> dict:
    """Readiness fields plus the comparison cache's occupancy and hit counters."""
    return {
        "status": "ok",
        "service": "product-compare-api",
        "commit": settings.git_sha,
        "catalog": settings.catalog_base_url,
        "cache": product_cache.stats(),
    }
