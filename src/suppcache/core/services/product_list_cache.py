"""Product listing cache with a pagination cap."""

import logging
from datetime import timedelta
from typing import Generic, TypeVar

from suppcache.core.entities.product_query import ProductListQuery
from suppcache.core.services.cache_service import CacheService, Producer
from suppcache.infrastructure.key_builders.default import (
    PRODUCTS_NAMESPACE,
    DefaultKeyBuilder,
)

logger = logging.getLogger(__name__)

P = TypeVar("P")


class ProductListCache(Generic[P]):
    """Caches the first pages of the product listing.

    Only pages ``1..cached_pages`` are eligible. Deeper pages are rarely
    requested twice, so they bypass the store entirely: ``get`` misses,
    ``set`` does nothing and ``get_or_load`` calls the producer directly.
    """

    def __init__(
        self,
        service: CacheService[P],
        key_builder: DefaultKeyBuilder,
        cached_pages: int = 2,
        ttl: timedelta = timedelta(hours=1),
    ) -> None:
        """Initialize the product listing cache.

        Args:
            service: Cache service dedicated to listing pages.
            key_builder: Key builder for listing keys.
            cached_pages: Number of leading pages eligible for caching.
            ttl: Lifetime of a cached page.
        """
        self._service = service
        self._key_builder = key_builder
        self._cached_pages = cached_pages
        self._ttl = ttl

    @property
    def cached_pages(self) -> int:
        return self._cached_pages

    def should_cache(self, query: ProductListQuery) -> bool:
        """Check whether a page is eligible for caching."""
        return query.normalized().page <= self._cached_pages

    def key_for(self, query: ProductListQuery) -> str:
        return self._key_builder.build_product_query_key(query)

    def get(self, query: ProductListQuery) -> P | None:
        """Return a cached page, or None (always None beyond the cap)."""
        if not self.should_cache(query):
            return None
        return self._service.get(self.key_for(query))

    def set(self, query: ProductListQuery, page: P) -> None:
        """Cache a page; pages beyond the cap are ignored."""
        if not self.should_cache(query):
            logger.debug("Skipping cache for page %d", query.page)
            return
        self._service.put(self.key_for(query), page, self._ttl)

    async def get_or_load(self, query: ProductListQuery, producer: Producer[P]) -> P:
        """Serve a page from cache, loading it on a miss.

        Args:
            query: The listing request.
            producer: Coroutine function fetching the page from the database.

        Returns:
            The page.
        """
        if not self.should_cache(query):
            return await producer()
        return await self._service.load_or_compute(self.key_for(query), producer, self._ttl)

    def clear(self) -> int:
        """Drop every cached listing page.

        Returns:
            Number of pages dropped.
        """
        return self._service.invalidate(self._key_builder.scope(PRODUCTS_NAMESPACE))
