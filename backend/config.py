"""Centralized configuration — all env vars in one place."""

import os

from errors import ConfigurationError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = _int_env("PORT", 8080)

        # Upstream product catalog
        self.catalog_base_url: str = os.getenv("CATALOG_BASE_URL", "https://fakestoreapi.com").rstrip("/")
        self.catalog_timeout_seconds: float = _float_env("CATALOG_TIMEOUT_SECONDS", 10.0)

        # Process-wide recency cache for price comparisons
        self.cache_capacity: int = _int_env("CACHE_CAPACITY", 10)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems (empty when all is well)."""
        problems = []
        if self.cache_capacity <= 0:
            problems.append(f"CACHE_CAPACITY must be positive, got {self.cache_capacity}")
        if self.catalog_timeout_seconds <= 0:
            problems.append(f"CATALOG_TIMEOUT_SECONDS must be positive, got {self.catalog_timeout_seconds}")
        if not self.catalog_base_url.startswith(("http://", "https://")):
            problems.append(f"CATALOG_BASE_URL must be an http(s) URL, got {self.catalog_base_url!r}")
        return problems


settings = Settings()
