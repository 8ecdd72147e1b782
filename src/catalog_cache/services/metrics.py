"""In-process counters for cache behaviour."""

from dataclasses import dataclass, fields


@dataclass
class CacheMetrics:
    """Track cache and upstream activity since startup."""

    cache_hits: int = 0
    cache_misses: int = 0
    store_unavailable: int = 0
    upstream_fetches: int = 0
    upstream_errors: int = 0
    coalesced_requests: int = 0
    stale_writes_discarded: int = 0
    invalidations: int = 0
    webhooks_ignored: int = 0

    @property
    def total_reads(self) -> int:
        return self.cache_hits + self.cache_misses + self.store_unavailable

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_reads == 0:
            return 0.0
        return self.cache_hits / self.total_reads

    def record_hit(self) -> None:
        self.cache_hits += 1

    def record_miss(self) -> None:
        self.cache_misses += 1

    def record_store_unavailable(self) -> None:
        self.store_unavailable += 1

    def record_upstream_fetch(self) -> None:
        self.upstream_fetches += 1

    def record_upstream_error(self) -> None:
        self.upstream_errors += 1

    def record_coalesced(self) -> None:
        self.coalesced_requests += 1

    def record_stale_write_discarded(self) -> None:
        self.stale_writes_discarded += 1

    def record_invalidation(self) -> None:
        self.invalidations += 1

    def record_webhook_ignored(self) -> None:
        self.webhooks_ignored += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        data: dict[str, float | int] = {f.name: getattr(self, f.name) for f in fields(self)}
        data["total_reads"] = self.total_reads
        data["hit_rate"] = self.hit_rate
        return data
