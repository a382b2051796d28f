import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT_BASE_URLS = {
    "development": "https://dev-api.example.com",
    "staging": "https://staging-api.example.com",
    "production": "https://api.example.com",
}

LOCAL_STORE_BACKENDS = ("memory", "redis")


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "")
    return float(value) if value else None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Remote catalog service
    environment: str = os.getenv("APP_ENV", "development")
    api_base_url_override: str | None = os.getenv("API_BASE_URL")
    api_timeout: float = float(os.getenv("API_TIMEOUT", "30.0"))

    # Retry
    retry_max_attempts: int = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
    retry_wait_min: float = float(os.getenv("RETRY_WAIT_MIN", "0.5"))
    retry_wait_max: float = float(os.getenv("RETRY_WAIT_MAX", "8.0"))
    retry_wait_multiplier: float = float(os.getenv("RETRY_WAIT_MULTIPLIER", "1.0"))

    # In-memory cache (unset = no expiry, 0 = unbounded)
    cache_ttl: float | None = _optional_float("CACHE_TTL")
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "0"))

    # Offline support
    offline_fallback_on_error: bool = os.getenv("OFFLINE_FALLBACK_ON_ERROR", "true").lower() == "true"
    local_store_backend: str = os.getenv("LOCAL_STORE_BACKEND", "memory")

    # Redis (local store backend)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_products_key: str = os.getenv("REDIS_PRODUCTS_KEY", "products")

    # Connectivity probe
    connectivity_probe_url: str | None = os.getenv("CONNECTIVITY_PROBE_URL")

    # Observability
    metrics_namespace: str = os.getenv("METRICS_NAMESPACE", "product_repository")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    @property
    def api_base_url(self) -> str:
        """Resolve the catalog service base URL.

        Returns:
            The explicit override if set, otherwise the URL for the environment
        """
        if self.api_base_url_override:
            return self.api_base_url_override
        return ENVIRONMENT_BASE_URLS[self.environment]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.environment not in ENVIRONMENT_BASE_URLS:
            raise ValueError(
                f"APP_ENV must be one of {sorted(ENVIRONMENT_BASE_URLS)}, got {self.environment!r}"
            )

        if self.api_timeout <= 0:
            raise ValueError("API_TIMEOUT must be positive")

        if self.retry_max_attempts < 1:
            raise ValueError("RETRY_MAX_ATTEMPTS must be at least 1")

        if not 0 <= self.retry_wait_min <= self.retry_wait_max:
            raise ValueError("RETRY_WAIT_MIN must be between 0 and RETRY_WAIT_MAX")

        if self.cache_ttl is not None and self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be positive when set")

        if self.cache_max_size < 0:
            raise ValueError("CACHE_MAX_SIZE must be 0 (unbounded) or positive")

        if self.local_store_backend not in LOCAL_STORE_BACKENDS:
            raise ValueError(
                f"LOCAL_STORE_BACKEND must be one of {list(LOCAL_STORE_BACKENDS)}, "
                f"got {self.local_store_backend!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings | None = None) -> redis.Redis:
    """Create an async Redis client instance."""
    settings = settings or get_settings()
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
