"""Cache service - cache-aside orchestration and invalidation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from datetime import timedelta
from typing import Generic, TypeVar

from suppcache.core.entities.cache_config import CacheConfig
from suppcache.core.interfaces.cache_store import ICacheStore
from suppcache.core.interfaces.key_builder import IKeyBuilder

logger = logging.getLogger(__name__)

V = TypeVar("V")

Producer = Callable[[], Awaitable[V]]

GLOB_CHARS = frozenset("*?[")


class CacheService(Generic[V]):
    """Domain service wrapping a store with the cache-aside pattern.

    Callers write ``await service.load_or_compute(key, producer)``
    instead of checking and populating the store by hand.

    Two overlapping ``load_or_compute`` calls for the same missing key
    both run their producer; in-flight loads are not de-duplicated.
    """

    def __init__(
        self,
        store: ICacheStore[V],
        key_builder: IKeyBuilder,
        config: CacheConfig | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            store: The cache store holding the entries.
            key_builder: The key builder for generating cache keys.
            config: Optional cache configuration. Uses defaults if not provided.
        """
        self._store = store
        self._key_builder = key_builder
        self._config = config or CacheConfig()

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore[V]:
        return self._store

    @property
    def key_builder(self) -> IKeyBuilder:
        return self._key_builder

    @property
    def stats(self) -> dict[str, int]:
        """Get loader statistics.

        Unlike ``TTLCacheStore.stats`` these are real hit and miss counts
        for every lookup that went through this service.

        Returns:
            Dictionary with hits, misses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def get(self, key: str) -> V | None:
        """Look up a key, counting the hit or miss.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None.
        """
        if not self._config.enabled:
            return None

        value = self._store.get(key)
        if value is None:
            self._misses += 1
            return None

        self._hits += 1
        return value

    def put(
        self,
        key: str,
        value: V,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        """Store a value with the configured default TTL.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional TTL. Uses config default if not provided.
            tags: Optional tags for invalidation.
        """
        if not self._config.enabled:
            return
        effective_ttl = ttl if ttl is not None else self._config.default_ttl
        self._store.set(key, value, effective_ttl, tags)

    async def load_or_compute(
        self,
        key: str,
        producer: Producer[V],
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> V:
        """Return the cached value for key, computing it on a miss.

        On a miss the producer is awaited exactly once. Its result is
        stored before being returned. If the producer raises, the
        exception propagates unchanged and nothing is stored.

        Args:
            key: The cache key.
            producer: Zero-argument coroutine function for the slow path.
            ttl: Optional TTL. Uses config default if not provided.
            tags: Optional tags for invalidation.

        Returns:
            The cached or freshly produced value.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = await producer()
        self.put(key, value, ttl, tags)
        return value

    async def warm(
        self,
        loaders: Mapping[str, Producer[V]],
        ttl: timedelta | None = None,
    ) -> int:
        """Populate several keys concurrently.

        Warming is best effort: a failing producer is logged and skipped.

        Args:
            loaders: Producers keyed by cache key.
            ttl: Optional TTL for every warmed entry.

        Returns:
            Number of keys successfully warmed.
        """
        if not loaders:
            return 0

        keys = list(loaders)
        results = await asyncio.gather(
            *(self.load_or_compute(key, loaders[key], ttl) for key in keys),
            return_exceptions=True,
        )

        warmed = 0
        for key, result in zip(keys, results):
            if isinstance(result, BaseException):
                logger.warning("Cache warming failed for %s: %s", key, result)
            else:
                warmed += 1

        logger.info("Cache warming completed: %d/%d keys", warmed, len(keys))
        return warmed

    def invalidate(self, scope: str) -> int:
        """Invalidate cached entries by key scope.

        A scope without glob characters is a key prefix, so
        ``invalidate("product:")`` removes ``product:1`` and
        ``product:2`` but not ``user:1``. Glob patterns are used as-is.
        Invalidating an empty store is a no-op.

        Args:
            scope: Key prefix or glob pattern.

        Returns:
            Number of entries invalidated.
        """
        pattern = scope if GLOB_CHARS & set(scope) else f"{scope}*"
        count = self._store.delete_pattern(pattern)
        if count:
            logger.debug("Invalidated %d entries for scope %s", count, scope)
        return count

    def invalidate_tags(self, tags: list[str]) -> int:
        """Invalidate cached entries by dependency tags.

        Args:
            tags: List of tags to invalidate.

        Returns:
            Number of entries invalidated.
        """
        return sum(self._store.invalidate_tag(tag) for tag in tags)

    def delete(self, key: str) -> bool:
        return self._store.delete(key)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()
        self._hits = 0
        self._misses = 0
