"""Catalog response domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawUpstreamResponse:
    """Reply from the upstream catalog, before normalization.

    Attributes:
        status_code: HTTP status returned by upstream
        headers: Response headers, keys lower-cased
        body: Raw response body
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())


@dataclass(frozen=True)
class CatalogResponseEntity:
    """Canonical catalog response.

    Attributes:
        results: Upstream records in upstream order (a list for collections,
            a single object for item lookups)
        total: Total record count from ``x-wp-total``, if present
        pages: Total page count from ``x-wp-totalpages``, if present
    """

    results: Any
    total: int | None = None
    pages: int | None = None

    @property
    def pagination(self) -> dict[str, int]:
        pagination = {}
        if self.total is not None:
            pagination["total"] = self.total
        if self.pages is not None:
            pagination["pages"] = self.pages
        return pagination

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the cached/served shape ``{results, total?, pages?}``."""
        return {"results": self.results, **self.pagination}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CatalogResponseEntity":
        return cls(
            results=data.get("results"),
            total=data.get("total"),
            pages=data.get("pages"),
        )
