"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state

Tests pre-seed ``app.state.cache_store`` / ``app.state.upstream_client``
through ``create_app`` to swap in fakes.
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from catalog_cache.config import Settings
from catalog_cache.handlers import CatalogHandler, WebhookHandler
from catalog_cache.logging import get_logger
from catalog_cache.protocols import CacheStore
from catalog_cache.repositories import InMemoryCacheRepository, RedisCacheRepository, WooCommerceClient
from catalog_cache.services import CacheMetrics, CacheVersion, InvalidationService, ProxyService

logger = get_logger("catalog_cache.app")


def get_catalog_handler(request: Request) -> CatalogHandler:
    """Dependency injection for CatalogHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "catalog_handler", None)
    if handler is None:
        raise RuntimeError("CatalogHandler not initialized. Check lifespan setup.")
    return handler


def get_webhook_handler(request: Request) -> WebhookHandler:
    """Dependency injection for WebhookHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "webhook_handler", None)
    if handler is None:
        raise RuntimeError("WebhookHandler not initialized. Check lifespan setup.")
    return handler


def build_cache_store(config: Settings) -> CacheStore:
    """Create the configured cache backend."""
    if config.cache_backend == "redis":
        return RedisCacheRepository.create(config)
    return InMemoryCacheRepository()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Cache store and upstream client (data access)
    2. Cache version, metrics, proxy and invalidation services
    3. Catalog and webhook handlers

    Cleanup:
        Stops the expiry sweep, closes connections, removes state
    """
    config: Settings = app.state.settings

    store: CacheStore = getattr(app.state, "cache_store", None) or build_cache_store(config)
    upstream = getattr(app.state, "upstream_client", None) or WooCommerceClient.create(config)

    version = CacheVersion()
    metrics = CacheMetrics()
    proxy_service = ProxyService(
        store=store,
        upstream=upstream,
        version=version,
        metrics=metrics,
        ttl=config.cache_ttl,
        upstream_context=config.upstream_context,
        coalesce=config.coalesce_requests,
    )
    invalidation_service = InvalidationService(
        store=store,
        version=version,
        secret=config.webhook_secret,
        metrics=metrics,
        reject_invalid=config.webhook_reject_invalid,
    )

    app.state.cache_store = store
    app.state.upstream_client = upstream
    app.state.cache_version = version
    app.state.proxy_service = proxy_service
    app.state.invalidation_service = invalidation_service
    app.state.catalog_handler = CatalogHandler(proxy_service=proxy_service, version=version)
    app.state.webhook_handler = WebhookHandler(invalidation_service=invalidation_service)

    cleanup_task = None
    if isinstance(store, InMemoryCacheRepository):
        cleanup_task = asyncio.create_task(store.run_cleanup())

    if not config.webhook_secret:
        logger.warning("WOOCOMMERCE_WEBHOOK_SECRET is not set; webhooks will never invalidate the cache")

    logger.info(
        "Catalog cache started",
        upstream=config.api_base_url,
        cache_backend=config.cache_backend,
        cache_ttl=config.cache_ttl,
        cache_version=version.current,
        cache_healthy=await store.health_check(),
    )

    yield

    if cleanup_task is not None:
        cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await cleanup_task

    await upstream.close()
    await store.close()

    del app.state.catalog_handler
    del app.state.webhook_handler
    del app.state.proxy_service
    del app.state.invalidation_service
    del app.state.cache_version
    del app.state.upstream_client
    del app.state.cache_store
    logger.info("Catalog cache shut down")


# Type aliases for cleaner dependency injection
CatalogHandlerDep = Annotated[CatalogHandler, Depends(get_catalog_handler)]
WebhookHandlerDep = Annotated[WebhookHandler, Depends(get_webhook_handler)]
