"""Cache entry and lookup result entities."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CacheEntryEntity:
    """A serialized value held by a cache store.

    Attributes:
        value: The serialized catalog response (JSON text)
        expires_at: Absolute Unix timestamp after which the entry is gone,
            or None to keep it until the next flush
    """

    value: str
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is past its deadline at ``now``."""
        return self.expires_at is not None and now >= self.expires_at


class LookupStatus(str, Enum):
    """Outcome of a cache lookup."""

    HIT = "hit"
    MISS = "miss"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True)
class CacheLookup:
    """Result of ``CacheStore.get``.

    ``STORE_UNAVAILABLE`` is reported separately from ``MISS`` so callers can
    count it, but the proxy always treats it as a miss.
    """

    status: LookupStatus
    value: str | None = None

    @classmethod
    def hit(cls, value: str) -> "CacheLookup":
        return cls(status=LookupStatus.HIT, value=value)

    @classmethod
    def miss(cls) -> "CacheLookup":
        return cls(status=LookupStatus.MISS)

    @classmethod
    def unavailable(cls) -> "CacheLookup":
        return cls(status=LookupStatus.STORE_UNAVAILABLE)

    @property
    def is_hit(self) -> bool:
        return self.status is LookupStatus.HIT
