"""Top-N leaderboard snapshot cache."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta
from typing import Generic, TypeVar

from suppcache.core.services.cache_service import CacheService
from suppcache.infrastructure.key_builders.default import DefaultKeyBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")

SnapshotProducer = Callable[[int], Awaitable[Sequence[T]]]


class LeaderboardCache(Generic[T]):
    """Caches a whole "top N" ranking under one key and slices it per page.

    The producer receives N and returns the ranking; anything beyond N is
    dropped before caching. Every page request is served from the same
    snapshot until it expires or is invalidated.
    """

    def __init__(
        self,
        service: CacheService[list[T]],
        key_builder: DefaultKeyBuilder,
        board: str,
        size: int = 75,
        ttl: timedelta = timedelta(hours=24),
    ) -> None:
        if size < 1:
            raise ValueError("size must be a positive integer")
        self._service = service
        self._board = board
        self._size = size
        self._ttl = ttl
        self._key = key_builder.build_leaderboard_key(board, size)

    @property
    def key(self) -> str:
        return self._key

    @property
    def size(self) -> int:
        return self._size

    async def snapshot(self, producer: SnapshotProducer[T]) -> list[T]:
        """Return the cached top-N list, computing it if absent."""

        async def load() -> list[T]:
            items = list(await producer(self._size))[: self._size]
            logger.info("Computed %s leaderboard: %d items", self._board, len(items))
            return items

        return await self._service.load_or_compute(self._key, load, self._ttl)

    async def get_page(
        self,
        page: int,
        limit: int,
        producer: SnapshotProducer[T],
    ) -> list[T]:
        """Return one page of the leaderboard.

        ``page`` is clamped to at least 1 and ``limit`` to ``[1, size]``.
        Pages past the end of the snapshot are empty.

        Args:
            page: 1-based page number.
            limit: Items per page.
            producer: Coroutine function computing the top-N ranking.

        Returns:
            The requested slice of the snapshot.
        """
        page = max(1, page)
        limit = min(max(1, limit), self._size)
        items = await self.snapshot(producer)
        start = (page - 1) * limit
        return items[start : start + limit]

    async def refresh(self, producer: SnapshotProducer[T]) -> list[T]:
        """Recompute the snapshot and replace the cached one.

        The previous snapshot is only replaced once the producer succeeds.
        """
        items = list(await producer(self._size))[: self._size]
        self._service.put(self._key, items, self._ttl)
        logger.info("Refreshed %s leaderboard: %d items", self._board, len(items))
        return items

    def invalidate(self) -> bool:
        """Drop the cached snapshot."""
        return self._service.delete(self._key)
