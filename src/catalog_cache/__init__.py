"""Catalog Cache - read-through cache in front of the WooCommerce catalog API.

This package provides a layered architecture for catalog caching:

Layers:
    - protocols: Interface contracts (CacheStore, UpstreamClient)
    - repositories: Cache backends and the WooCommerce client
    - services: Cache-aside proxy, response normalization, invalidation
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from catalog_cache.repositories import InMemoryCacheRepository, WooCommerceClient
    from catalog_cache.services import PRODUCT, CacheVersion, ProxyService

    proxy = ProxyService(
        store=InMemoryCacheRepository(),
        upstream=WooCommerceClient.create(),
        version=CacheVersion(),
    )
    response = await proxy.read(PRODUCT, {"id": "42"})
    ```

For HTTP API:
    ```python
    from catalog_cache.api.app import app
    ```
"""

from catalog_cache.config import Settings, settings
from catalog_cache.entities import (
    CacheEntryEntity,
    CacheLookup,
    CatalogResponseEntity,
    InvalidationOutcome,
    RawUpstreamResponse,
    WebhookEnvelope,
)
from catalog_cache.exceptions import (
    BodyParseError,
    CacheUnavailableError,
    CatalogCacheError,
    SignatureError,
    TransportError,
    UpstreamError,
    UpstreamStatusError,
)
from catalog_cache.handlers import CatalogHandler, WebhookHandler
from catalog_cache.protocols import CacheStore, UpstreamClient
from catalog_cache.repositories import InMemoryCacheRepository, RedisCacheRepository, WooCommerceClient
from catalog_cache.services import CacheVersion, InvalidationService, ProxyService, ResponseNormalizer

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "UpstreamClient",
    # Services (business logic)
    "CacheVersion",
    "InvalidationService",
    "ProxyService",
    "ResponseNormalizer",
    # Handlers (HTTP)
    "CatalogHandler",
    "WebhookHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "WooCommerceClient",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheLookup",
    "CatalogResponseEntity",
    "InvalidationOutcome",
    "RawUpstreamResponse",
    "WebhookEnvelope",
    # Errors
    "CatalogCacheError",
    "UpstreamError",
    "UpstreamStatusError",
    "BodyParseError",
    "TransportError",
    "CacheUnavailableError",
    "SignatureError",
]
