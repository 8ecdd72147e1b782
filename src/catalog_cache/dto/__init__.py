"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for response serialization and the OpenAPI schema.

Internal domain logic should use entities from the entities package.
"""

from .responses import (
    CatalogReadResponse,
    CleanCacheResponse,
    HealthCheckResponse,
    StatsResponse,
)

__all__ = [
    "CatalogReadResponse",
    "CleanCacheResponse",
    "HealthCheckResponse",
    "StatsResponse",
]
