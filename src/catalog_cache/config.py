import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENTS = ("development", "production", "test")
CACHE_BACKENDS = ("memory", "redis")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # WooCommerce upstream
    woocommerce_site_url: str = os.getenv("WOOCOMMERCE_SITE_URL", "http://localhost:8080")
    woocommerce_api_key: str = os.getenv("WOOCOMMERCE_API_KEY", "")
    woocommerce_api_secret: str = os.getenv("WOOCOMMERCE_API_SECRET", "")
    woocommerce_api_version: str = os.getenv("WOOCOMMERCE_API_VERSION", "wc/v2")
    upstream_context: str = os.getenv("UPSTREAM_CONTEXT", "view")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10.0"))

    # Webhook
    webhook_secret: str = os.getenv("WOOCOMMERCE_WEBHOOK_SECRET", "")
    webhook_reject_invalid: bool = _env_bool("WEBHOOK_REJECT_INVALID", "false")

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "600"))  # 10 minutes for listings
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "catalog_cache")
    coalesce_requests: bool = _env_bool("COALESCE_REQUESTS", "true")

    # Redis (only used when CACHE_BACKEND=redis)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", os.getenv("API_PORT", "8000")))
    environment: str = os.getenv("APP_ENV", os.getenv("NODE_ENV", "production")).lower()
    log_level: str = os.getenv("LOG_LEVEL", "info")

    @property
    def is_development(self) -> bool:
        """Check if the service runs in development mode.

        Returns:
            True if environment is development, False otherwise
        """
        return self.environment == "development"

    @property
    def api_base_url(self) -> str:
        """Base URL of the WooCommerce REST API, e.g. https://shop/wp-json/wc/v2."""
        return f"{self.woocommerce_site_url.rstrip('/')}/wp-json/{self.woocommerce_api_version.strip('/')}"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be a positive number of seconds")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"APP_ENV must be one of {list(ENVIRONMENTS)}, got {self.environment!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an async Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )
