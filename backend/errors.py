"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Invalid startup configuration. Fatal, never rendered as an HTTP response."""


class ProductServiceError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class InvalidProductIDError(ProductServiceError):
    def __init__(self, param: str):
        super().__init__(f"Invalid {param}", status_code=400)
        self.param = param


class UpstreamFetchError(ProductServiceError):
    def __init__(self, product_id: int):
        super().__init__(f"Failed to fetch product {product_id}", status_code=500)
        self.product_id = product_id


class ListingUnavailableError(ProductServiceError):
    def __init__(self):
        super().__init__("Failed to fetch products", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(ProductServiceError)
    async def handle_product_service_error(_request: Request, exc: ProductServiceError):
        if exc.status_code >= 500:
            logger.warning("%s: %s", type(exc).__name__, exc.__cause__ or exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
