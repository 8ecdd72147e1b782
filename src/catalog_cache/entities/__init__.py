"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, CacheLookup, LookupStatus
from .catalog_response import CatalogResponseEntity, RawUpstreamResponse
from .webhook import InvalidationOutcome, WebhookEnvelope

__all__ = [
    "CacheEntryEntity",
    "CacheLookup",
    "LookupStatus",
    "CatalogResponseEntity",
    "RawUpstreamResponse",
    "InvalidationOutcome",
    "WebhookEnvelope",
]
