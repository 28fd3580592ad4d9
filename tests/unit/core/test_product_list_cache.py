"""Tests for ProductListCache."""

from datetime import timedelta
from typing import Any

import pytest
from conftest import FakeClock

from suppcache import (
    CacheService,
    DefaultKeyBuilder,
    ProductListCache,
    ProductListQuery,
    TTLCacheStore,
)


@pytest.fixture
def store(clock: FakeClock) -> TTLCacheStore[Any]:
    return TTLCacheStore(maxsize=50, timer=clock)


@pytest.fixture
def products(store: TTLCacheStore[Any]) -> ProductListCache[Any]:
    """Create a listing cache holding the first two pages."""
    key_builder = DefaultKeyBuilder()
    service: CacheService[Any] = CacheService(store=store, key_builder=key_builder)
    return ProductListCache(service, key_builder, cached_pages=2, ttl=timedelta(hours=1))


def page_loader(rows: list[dict[str, Any]]):
    calls = []

    async def load() -> list[dict[str, Any]]:
        calls.append(1)
        return rows

    load.calls = calls  # type: ignore[attr-defined]
    return load


class TestPaginationCap:
    """Only the first pages are ever stored."""

    @pytest.mark.parametrize("page", [1, 2])
    def test_leading_pages_cached(
        self, products: ProductListCache[Any], page: int
    ) -> None:
        query = ProductListQuery(page=page)
        products.set(query, [{"id": page}])

        assert products.get(query) == [{"id": page}]

    @pytest.mark.parametrize("page", [3, 4, 50])
    def test_deep_pages_never_stored(
        self,
        products: ProductListCache[Any],
        store: TTLCacheStore[Any],
        page: int,
    ) -> None:
        """Writing a deep page leaves the store unchanged."""
        query = ProductListQuery(page=page)
        products.set(query, [{"id": page}])

        assert len(store) == 0
        assert products.get(query) is None
        assert not products.should_cache(query)

    @pytest.mark.asyncio
    async def test_deep_page_loaded_every_time(
        self, products: ProductListCache[Any], store: TTLCacheStore[Any]
    ) -> None:
        load = page_loader([{"id": 99}])
        query = ProductListQuery(page=3, category="protein")

        assert await products.get_or_load(query, load) == [{"id": 99}]
        assert await products.get_or_load(query, load) == [{"id": 99}]
        assert len(load.calls) == 2
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_first_page_loaded_once(self, products: ProductListCache[Any]) -> None:
        load = page_loader([{"id": 1}])
        query = ProductListQuery(page=1, category="protein", sort="price", order="asc")

        await products.get_or_load(query, load)
        await products.get_or_load(query, load)

        assert len(load.calls) == 1

    def test_page_zero_shares_first_page_key(self, products: ProductListCache[Any]) -> None:
        products.set(ProductListQuery(page=1), ["first"])

        assert products.get(ProductListQuery(page=0)) == ["first"]

    def test_zero_cached_pages_disables_caching(self, store: TTLCacheStore[Any]) -> None:
        key_builder = DefaultKeyBuilder()
        service: CacheService[Any] = CacheService(store=store, key_builder=key_builder)
        products: ProductListCache[Any] = ProductListCache(service, key_builder, cached_pages=0)

        products.set(ProductListQuery(page=1), ["first"])

        assert len(store) == 0


class TestListingKeys:
    """Different filters never share an entry."""

    def test_filters_isolated(self, products: ProductListCache[Any]) -> None:
        products.set(ProductListQuery(page=1, category="protein"), ["protein"])
        products.set(ProductListQuery(page=1, category="pre workout"), ["pre"])

        assert products.get(ProductListQuery(page=1, category="Protein")) == ["protein"]
        assert products.get(ProductListQuery(page=1, category="pre workout")) == ["pre"]
        assert products.get(ProductListQuery(page=1)) is None

    def test_entry_expires(self, products: ProductListCache[Any], clock: FakeClock) -> None:
        query = ProductListQuery(page=1)
        products.set(query, ["row"])

        clock.advance(timedelta(hours=1, seconds=1))

        assert products.get(query) is None

    def test_clear_only_drops_listing_pages(
        self, products: ProductListCache[Any], store: TTLCacheStore[Any]
    ) -> None:
        products.set(ProductListQuery(page=1), ["a"])
        products.set(ProductListQuery(page=2), ["b"])
        store.set("product:id:1", {"id": 1})

        assert products.clear() == 2
        assert store.keys() == ["product:id:1"]
