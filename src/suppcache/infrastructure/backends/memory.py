"""In-memory TTL cache store implementation."""

import fnmatch
import logging
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Generic, TypeVar

from cachetools import FIFOCache  # type: ignore[import-untyped]

from suppcache.core.entities.cache_entry import CacheEntry
from suppcache.core.entities.cache_stats import CacheStats

logger = logging.getLogger(__name__)

V = TypeVar("V")


class _CreationOrderCache(FIFOCache):
    """FIFOCache reporting evictions.

    FIFOCache moves a key to the end of its order whenever the key is
    written, so the first key is always the one with the oldest
    insert/refresh time.
    """

    def __init__(self, maxsize: int, on_evict: Callable[[str, Any], None]) -> None:
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self) -> tuple[str, Any]:
        key, value = super().popitem()
        self._on_evict(key, value)
        return key, value


class TTLCacheStore(Generic[V]):
    """Bounded in-memory cache with per-entry TTL and hit counting.

    Suitable for single-process deployments. Expired entries are removed
    lazily on access (``get``/``has``) or in bulk by ``cleanup``. When a
    new key is written to a full store, the entry with the oldest
    creation time is evicted, regardless of how recently it was read.

    Not thread-safe: use from a single event loop.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: timedelta = timedelta(hours=1),
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache store.

        Args:
            maxsize: Maximum number of entries in the store.
            default_ttl: TTL applied when ``set`` is called without one.
            timer: Monotonic clock returning seconds.
        """
        if maxsize < 1:
            raise ValueError("maxsize must be a positive integer")
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._timer = timer
        self._entries = self._new_entries()
        # Track tags separately for invalidation
        self._tags: dict[str, set[str]] = {}

    def get(self, key: str) -> V | None:
        """Retrieve cached value by key.

        A live entry has its hit count incremented. An expired entry is
        deleted and reported as a miss.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        entry = self._live_entry(key)
        if entry is None:
            return None
        entry.record_hit()
        return entry.value

    def get_entry(self, key: str) -> CacheEntry[V] | None:
        """Return the live entry for key without counting a hit."""
        return self._live_entry(key)

    def set(
        self,
        key: str,
        value: V,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        """Store value with optional TTL.

        Overwriting a key refreshes its creation time and resets its hit
        count.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses default.
            tags: Optional dependency tags for invalidation.
        """
        entry = CacheEntry.create(
            key=key,
            value=value,
            created_at=self._timer(),
            ttl=ttl if ttl is not None else self._default_ttl,
            tags=tags,
        )
        previous = self._entries.get(key)
        if previous is not None:
            self._untag(key, previous.tags)

        self._entries[key] = entry
        for tag in entry.tags:
            self._tags.setdefault(tag, set()).add(key)

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        self._untag(key, entry.tags)
        return True

    def has(self, key: str) -> bool:
        """Check if key exists and has not expired.

        Does not count as a hit.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return self._live_entry(key) is not None

    def clear(self) -> None:
        """Clear all cached values."""
        self._entries = self._new_entries()
        self._tags.clear()

    def cleanup(self) -> int:
        """Delete every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._timer()
        expired = [
            key for key, entry in list(self._entries.items())
            if entry.is_expired(now)
        ]
        for key in expired:
            self.delete(key)
        if expired:
            logger.debug("Removed %d expired cache entries", len(expired))
        return len(expired)

    def keys(self) -> list[str]:
        """Return the keys of all live entries."""
        now = self._timer()
        return [
            key for key, entry in list(self._entries.items())
            if not entry.is_expired(now)
        ]

    def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern to match keys.

        Returns:
            Number of keys deleted.
        """
        keys_to_delete = [
            key for key in list(self._entries.keys())
            if fnmatch.fnmatchcase(key, pattern)
        ]
        return sum(1 for key in keys_to_delete if self.delete(key))

    def invalidate_tag(self, tag: str) -> int:
        """Delete every entry stored with ``tag``.

        Args:
            tag: Dependency tag.

        Returns:
            Number of entries deleted.
        """
        keys = self._tags.pop(tag, set())
        return sum(1 for key in list(keys) if self.delete(key))

    def stats(self) -> CacheStats:
        """Return a diagnostic snapshot of the store."""
        return CacheStats.from_hit_counts(
            [entry.hit_count for entry in self._entries.values()],
            max_size=self._maxsize,
        )

    def __len__(self) -> int:
        """Return the number of items in the store."""
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    def _new_entries(self) -> _CreationOrderCache:
        return _CreationOrderCache(maxsize=self._maxsize, on_evict=self._handle_eviction)

    def _live_entry(self, key: str) -> CacheEntry[V] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._timer()):
            self.delete(key)
            return None
        return entry

    def _handle_eviction(self, key: str, entry: CacheEntry[V]) -> None:
        self._untag(key, entry.tags)
        logger.debug("Evicted oldest cache entry %s", key)

    def _untag(self, key: str, tags: tuple[str, ...]) -> None:
        for tag in tags:
            keys = self._tags.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tags[tag]
