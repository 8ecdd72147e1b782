"""HTTP handlers for catalog reads.

Handlers convert between service results and HTTP responses. Upstream
failures become an opaque 500; the cause is logged, never echoed.
"""

from collections.abc import Mapping

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from catalog_cache.dto import CatalogReadResponse, HealthCheckResponse, StatsResponse
from catalog_cache.exceptions import UpstreamError
from catalog_cache.services import CacheVersion, CatalogResource, ProxyService


class CatalogHandler:
    """HTTP handlers for catalog read operations.

    Example:
        ```python
        handler = CatalogHandler(proxy_service=proxy, version=version)

        @app.get("/products/{product_id}")
        async def get_product(product_id: str, request: Request):
            return await handler.read(PRODUCT, {"id": product_id}, request.url.query)
        ```
    """

    def __init__(self, proxy_service: ProxyService, version: CacheVersion) -> None:
        """Initialize the catalog handler.

        Args:
            proxy_service: The proxy service for cache-aside reads (required).
            version: Shared cache version token (required).
        """
        self._proxy = proxy_service
        self._version = version

    async def read(
        self,
        resource: CatalogResource,
        params: Mapping[str, str] | None = None,
        query: str = "",
    ) -> JSONResponse:
        """Handle GET catalog requests.

        Args:
            resource: Resource being read
            params: Route parameters
            query: Raw query string

        Returns:
            JSON body ``{results, total?, pages?, cacheVersion}``

        Raises:
            HTTPException: 500 if upstream could not serve the read
        """
        try:
            response = await self._proxy.read(resource, params, query)
        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error",
            ) from e

        dto = CatalogReadResponse(
            results=response.results,
            cache_version=self._version.current,
            **response.pagination,
        )
        return JSONResponse(content=dto.model_dump(by_alias=True, exclude_unset=True))

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        return StatsResponse(
            cache=await self._proxy.store.get_stats(),
            performance=self._proxy.metrics.to_dict(),
            cache_version=self._version.current,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            HTTPException: 503 if the cache store is unreachable
        """
        is_healthy = await self._proxy.store.health_check()
        if not is_healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache store unavailable",
            )

        return HealthCheckResponse(
            status="healthy",
            cache_healthy=is_healthy,
            cache_version=self._version.current,
        )
