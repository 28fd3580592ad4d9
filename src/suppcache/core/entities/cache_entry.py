"""Cache entry entity."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """A cached value with its creation time, TTL and hit counter.

    ``created_at`` is a reading of the owning store's monotonic timer, so
    entries are only comparable against the clock of the store that created
    them. The hit counter is the only field mutated after creation.
    """

    key: str
    value: V
    created_at: float
    ttl: timedelta | None = None
    hit_count: int = 0
    tags: tuple[str, ...] = ()

    @property
    def expires_at(self) -> float | None:
        """Calculate expiration time.

        Returns:
            The timer reading after which this entry is stale, or None if
            the entry never expires.
        """
        if self.ttl is None:
            return None
        return self.created_at + self.ttl.total_seconds()

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired.

        An entry stays live while ``now - created_at <= ttl``.

        Args:
            now: Current reading of the store's timer.

        Returns:
            True if the entry must no longer be served.
        """
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return now > expires_at

    def record_hit(self) -> None:
        """Count one successful read."""
        self.hit_count += 1

    @classmethod
    def create(
        cls,
        key: str,
        value: V,
        created_at: float,
        ttl: timedelta | None = None,
        tags: list[str] | tuple[str, ...] | None = None,
    ) -> "CacheEntry[V]":
        """Factory method to create a fresh cache entry.

        Args:
            key: The cache key.
            value: The value to cache.
            created_at: Timer reading at insertion.
            ttl: Optional time-to-live.
            tags: Optional dependency tags for invalidation.

        Returns:
            A new CacheEntry with a zero hit count.
        """
        return cls(
            key=key,
            value=value,
            created_at=created_at,
            ttl=ttl,
            tags=tuple(tags) if tags else (),
        )
