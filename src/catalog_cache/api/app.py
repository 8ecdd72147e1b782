import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog_cache.api.dependencies import CatalogHandlerDep, WebhookHandlerDep, lifespan
from catalog_cache.config import Settings, settings
from catalog_cache.dto import CatalogReadResponse, CleanCacheResponse, HealthCheckResponse, StatsResponse
from catalog_cache.logging import clear_context, configure_logging, get_logger, set_request_id
from catalog_cache.protocols import CacheStore, UpstreamClient
from catalog_cache.services import CATEGORIES, PRODUCT, PRODUCTS

SERVICE_NAME = "catalog_cache"
VERSION = "0.1.0"

logger = get_logger("catalog_cache.http")


def create_app(
    config: Settings | None = None,
    cache_store: CacheStore | None = None,
    upstream_client: UpstreamClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings to use. Defaults to the global settings.
        cache_store: Cache backend override (tests use an isolated store).
        upstream_client: Upstream client override (tests use a fake).

    Returns:
        The configured application
    """
    config = config or settings
    configure_logging(SERVICE_NAME, config.log_level, config.environment)

    app = FastAPI(
        title="WooCommerce Catalog Cache",
        description="Read-through cache in front of the WooCommerce catalog API",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.settings = config
    if cache_store is not None:
        app.state.cache_store = cache_store
    if upstream_client is not None:
        app.state.upstream_client = upstream_client

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        set_request_id(request.headers.get("x-request-id"))
        start_time = time.time()
        try:
            response = await call_next(request)
            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            return response
        finally:
            clear_context()

    register_routes(app)
    return app


def register_routes(app: FastAPI) -> None:
    """Attach the service routes to ``app``."""

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "WooCommerce Proxy Server",
            "version": VERSION,
            "endpoints": {
                "products": "/products",
                "product": "/products/{id}",
                "categories": "/categories",
                "clean_cache": "/clean-cache",
                "stats": "/stats",
                "health": "/health",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: CatalogHandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/stats", response_model=StatsResponse)
    async def get_stats(handler: CatalogHandlerDep) -> StatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.get("/products", response_model=CatalogReadResponse)
    async def list_products(request: Request, handler: CatalogHandlerDep):
        """List products; the query string is forwarded upstream verbatim."""
        return await handler.read(PRODUCTS, query=request.url.query)

    @app.get("/products/{product_id}", response_model=CatalogReadResponse)
    async def get_product(product_id: str, request: Request, handler: CatalogHandlerDep):
        """Get a single product."""
        return await handler.read(PRODUCT, {"id": product_id}, request.url.query)

    @app.get("/categories", response_model=CatalogReadResponse)
    async def list_categories(request: Request, handler: CatalogHandlerDep):
        """List product categories."""
        return await handler.read(CATEGORIES, query=request.url.query)

    @app.post("/clean-cache", response_model=CleanCacheResponse)
    async def clean_cache(request: Request, handler: WebhookHandlerDep) -> CleanCacheResponse:
        """WooCommerce webhook receiver; flushes the cache on a valid signature."""
        return await handler.clean_cache(request)


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "catalog_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
