"""Cache statistics snapshot."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CacheStats:
    """Diagnostic snapshot of a cache store.

    ``hit_rate`` is ``total_hits / (total_hits + size)``. Misses are not
    tracked by the store, so this approximates effectiveness rather than
    being a true hit/miss ratio. ``CacheService.stats`` keeps real
    hit and miss counters.
    """

    size: int
    max_size: int
    total_hits: int
    avg_hits: float
    hit_rate: float

    @classmethod
    def from_hit_counts(cls, hit_counts: list[int], max_size: int) -> "CacheStats":
        """Build a snapshot from the hit counters of the live entries."""
        size = len(hit_counts)
        total_hits = sum(hit_counts)
        avg_hits = total_hits / size if size > 0 else 0.0
        hit_rate = total_hits / (total_hits + size) if size > 0 else 0.0
        return cls(
            size=size,
            max_size=max_size,
            total_hits=total_hits,
            avg_hits=round(avg_hits, 2),
            hit_rate=round(hit_rate, 2),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
