"""Cache store interface."""

from datetime import timedelta
from typing import Protocol, TypeVar

V = TypeVar("V")


class ICacheStore(Protocol[V]):
    """Contract for key/value cache stores.

    All operations are synchronous; only the producers wrapped by
    ``CacheService.load_or_compute`` suspend. Implementations must never
    return an expired value.
    """

    def get(self, key: str) -> V | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def set(
        self,
        key: str,
        value: V,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses store default.
            tags: Optional dependency tags for invalidation.
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    def has(self, key: str) -> bool:
        """Check if a live entry exists for key.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists and has not expired.
        """
        ...

    def clear(self) -> None:
        """Clear all cached values."""
        ...

    def keys(self) -> list[str]:
        """Return the keys currently held."""
        ...

    def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern to match keys.

        Returns:
            Number of keys deleted.
        """
        ...

    def invalidate_tag(self, tag: str) -> int:
        """Delete every entry stored with ``tag``.

        Args:
            tag: Dependency tag.

        Returns:
            Number of entries deleted.
        """
        ...
