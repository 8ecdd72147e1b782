"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CatalogReadResponse(BaseModel):
    """Response DTO for catalog reads.

    ``total`` and ``pages`` are only present when upstream sent the
    pagination headers; dump with ``exclude_unset=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    results: Any = Field(..., description="Upstream records, in upstream order")
    total: int | None = Field(None, description="Total number of records (x-wp-total)", ge=0)
    pages: int | None = Field(None, description="Total number of pages (x-wp-totalpages)", ge=0)
    cache_version: int = Field(
        ...,
        alias="cacheVersion",
        description="Cache version; changes whenever the catalog cache is invalidated",
    )


class CleanCacheResponse(BaseModel):
    """Response DTO for the invalidation webhook."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(..., description="Always true; the delivery was accepted")
    invalidated: bool = Field(..., description="Whether the cache was actually flushed")
    cache_version: int = Field(..., alias="cacheVersion", description="Cache version after handling")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    cache_version: int = Field(..., alias="cacheVersion", description="Current cache version")


class StatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    model_config = ConfigDict(populate_by_name=True)

    cache: dict[str, Any] = Field(..., description="Cache store statistics")
    performance: dict[str, float | int] = Field(..., description="Hit/miss and upstream counters")
    cache_version: int = Field(..., alias="cacheVersion", description="Current cache version")
