"""Redis cache store implementation."""

from datetime import timedelta
from typing import Any

import redis

from suppcache.core.interfaces.serializer import ISerializer
from suppcache.infrastructure.serializers.json import JsonSerializer


class RedisCacheStore:
    """Redis cache store for multi-process deployments.

    Honors the same contract as ``TTLCacheStore``; expiry is delegated
    to Redis and coherence between processes is Redis' responsibility.
    Hit counting and capacity eviction are left to the server
    (``maxmemory-policy``).

    Every call is a blocking round trip on the synchronous ``redis.Redis``
    client, so on an event loop each cache check stalls the loop for the
    network latency. Keep Redis close to the process, or run store calls
    through ``asyncio.to_thread``; an ``ICacheStore`` over ``redis.asyncio``
    would need awaitable store methods.
    """

    def __init__(
        self,
        client: "redis.Redis | None" = None,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "suppcache",
        default_ttl: timedelta | None = timedelta(hours=1),
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            client: Existing Redis client. Created from ``redis_url`` if None.
            redis_url: Redis connection URL.
            key_prefix: Prefix for all cache keys.
            default_ttl: Default TTL. None stores keys without expiry.
            serializer: Serializer for values. Defaults to JSON.
        """
        self._redis = client if client is not None else redis.Redis.from_url(redis_url)
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl
        self._serializer = serializer or JsonSerializer()

    def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        data = self._redis.get(self._prefixed_key(key))
        if data is None:
            return None
        return self._serializer.deserialize(data)

    def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses default.
            tags: Optional dependency tags for invalidation.
        """
        prefixed_key = self._prefixed_key(key)
        payload = self._serializer.serialize(value)
        effective_ttl = ttl if ttl is not None else self._default_ttl

        if effective_ttl is not None:
            seconds = max(1, int(effective_ttl.total_seconds()))
            self._redis.setex(prefixed_key, seconds, payload)
        else:
            self._redis.set(prefixed_key, payload)

        for tag in tags or ():
            self._redis.sadd(self._tag_key(tag), key)

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        return self._redis.delete(self._prefixed_key(key)) > 0

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return self._redis.exists(self._prefixed_key(key)) > 0

    def clear(self) -> None:
        """Clear all cached values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        """
        self._delete_by_pattern(f"{self._key_prefix}:*")

    def keys(self) -> list[str]:
        """Return the unprefixed keys currently stored, tag sets excluded."""
        tag_space = f"{self._key_prefix}:tag:"
        offset = len(self._key_prefix) + 1
        keys: list[str] = []
        for raw in self._redis.scan_iter(match=f"{self._key_prefix}:*", count=100):
            name = raw.decode() if isinstance(raw, bytes) else raw
            if not name.startswith(tag_space):
                keys.append(name[offset:])
        return keys

    def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern to match keys.

        Returns:
            Number of keys deleted.
        """
        return self._delete_by_pattern(self._prefixed_key(pattern))

    def invalidate_tag(self, tag: str) -> int:
        """Delete every key registered under ``tag``.

        Args:
            tag: Dependency tag.

        Returns:
            Number of keys deleted.
        """
        tag_key = self._tag_key(tag)
        members = self._redis.smembers(tag_key)
        self._redis.delete(tag_key)
        if not members:
            return 0
        keys = [
            self._prefixed_key(m.decode() if isinstance(m, bytes) else m)
            for m in members
        ]
        return self._redis.delete(*keys)

    def _delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN.

        Uses SCAN instead of KEYS for production safety.

        Args:
            pattern: Redis glob pattern.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0

        while True:
            cursor, keys = self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                count += self._redis.delete(*keys)

            if cursor == 0:
                break

        return count

    def _prefixed_key(self, key: str) -> str:
        """Namespace a caller key under the store prefix.

        Always prefixes, so ``x`` and ``suppcache:x`` stay distinct keys.

        Args:
            key: The cache key.

        Returns:
            The key with prefix.
        """
        return f"{self._key_prefix}:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._key_prefix}:tag:{tag}"

    def close(self) -> None:
        """Close the Redis connection."""
        self._redis.close()

    def __enter__(self) -> "RedisCacheStore":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()
