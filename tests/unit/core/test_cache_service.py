"""Tests for CacheService."""

import asyncio
from datetime import timedelta
from typing import Any

import pytest
from conftest import FakeClock

from suppcache import CacheConfig, CacheService, DefaultKeyBuilder, TTLCacheStore


class ProducerError(Exception):
    pass


@pytest.fixture
def store(clock: FakeClock) -> TTLCacheStore[Any]:
    """Create an in-memory store driven by the fake clock."""
    return TTLCacheStore(maxsize=100, default_ttl=timedelta(minutes=5), timer=clock)


@pytest.fixture
def cache_service(store: TTLCacheStore[Any]) -> CacheService[Any]:
    """Create a cache service for testing."""
    return CacheService(
        store=store,
        key_builder=DefaultKeyBuilder(),
        config=CacheConfig(default_ttl=timedelta(minutes=5)),
    )


class CountingProducer:
    """Async producer recording how often it ran."""

    def __init__(self, value: Any = None, error: Exception | None = None) -> None:
        self.value = value
        self.error = error
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.value


class TestLoadOrCompute:
    """Tests for the cache-aside loader."""

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(
        self, cache_service: CacheService[Any]
    ) -> None:
        """The producer runs once; the second call is a hit."""
        producer = CountingProducer({"id": 1, "name": "whey isolate"})

        first = await cache_service.load_or_compute("product:1", producer)
        second = await cache_service.load_or_compute("product:1", producer)

        assert first == second == {"id": 1, "name": "whey isolate"}
        assert producer.calls == 1
        assert cache_service.stats == {"hits": 1, "misses": 1, "total": 2}

    @pytest.mark.asyncio
    async def test_producer_failure_propagates_and_stores_nothing(
        self, cache_service: CacheService[Any], store: TTLCacheStore[Any]
    ) -> None:
        """A failing producer surfaces its error and leaves no entry."""
        error = ProducerError("database unavailable")

        with pytest.raises(ProducerError) as exc_info:
            await cache_service.load_or_compute("product:1", CountingProducer(error=error))

        assert exc_info.value is error
        assert store.get("product:1") is None
        assert len(store) == 0

        producer = CountingProducer("fresh")
        assert await cache_service.load_or_compute("product:1", producer) == "fresh"
        assert store.get("product:1") == "fresh"

    @pytest.mark.asyncio
    async def test_failure_does_not_revive_stale_value(
        self, cache_service: CacheService[Any], clock: FakeClock
    ) -> None:
        """After expiry a failed reload leaves the key empty."""
        await cache_service.load_or_compute(
            "k", CountingProducer("old"), ttl=timedelta(seconds=1)
        )
        clock.advance(2)

        with pytest.raises(ProducerError):
            await cache_service.load_or_compute("k", CountingProducer(error=ProducerError()))

        assert cache_service.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_entry_reloaded(
        self, cache_service: CacheService[Any], clock: FakeClock
    ) -> None:
        producer = CountingProducer("v")
        await cache_service.load_or_compute("k", producer, ttl=timedelta(seconds=1))
        clock.advance(2)
        await cache_service.load_or_compute("k", producer, ttl=timedelta(seconds=1))

        assert producer.calls == 2

    @pytest.mark.asyncio
    async def test_uses_config_default_ttl(
        self, cache_service: CacheService[Any], store: TTLCacheStore[Any]
    ) -> None:
        await cache_service.load_or_compute("k", CountingProducer("v"))

        entry = store.get_entry("k")
        assert entry is not None
        assert entry.ttl == timedelta(minutes=5)

    @pytest.mark.asyncio
    async def test_concurrent_misses_each_call_producer(
        self, cache_service: CacheService[Any]
    ) -> None:
        """Overlapping loads of one key are not de-duplicated."""
        release = asyncio.Event()
        calls = 0

        async def slow_producer() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "value"

        tasks = [
            asyncio.create_task(cache_service.load_or_compute("k", slow_producer))
            for _ in range(3)
        ]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert results == ["value", "value", "value"]
        assert calls == 3

    @pytest.mark.asyncio
    async def test_disabled_cache_always_calls_producer(
        self, store: TTLCacheStore[Any]
    ) -> None:
        service: CacheService[Any] = CacheService(
            store=store,
            key_builder=DefaultKeyBuilder(),
            config=CacheConfig(enabled=False),
        )
        producer = CountingProducer("v")

        await service.load_or_compute("k", producer)
        await service.load_or_compute("k", producer)

        assert producer.calls == 2
        assert len(store) == 0


class TestCacheServiceBasics:
    """Tests for direct get/put and housekeeping."""

    def test_get_counts_miss(self, cache_service: CacheService[Any]) -> None:
        assert cache_service.get("missing") is None
        assert cache_service.stats["misses"] == 1

    def test_put_then_get(self, cache_service: CacheService[Any]) -> None:
        cache_service.put("k", [1, 2, 3])

        assert cache_service.get("k") == [1, 2, 3]
        assert cache_service.stats["hits"] == 1

    def test_delete(self, cache_service: CacheService[Any]) -> None:
        cache_service.put("k", 1)

        assert cache_service.delete("k") is True
        assert cache_service.delete("k") is False

    def test_clear_resets_stats(self, cache_service: CacheService[Any]) -> None:
        cache_service.put("k", 1)
        cache_service.get("k")

        cache_service.clear()

        assert cache_service.get("k") is None
        assert cache_service.stats == {"hits": 0, "misses": 1, "total": 1}


class TestWarm:
    """Tests for cache warming."""

    @pytest.mark.asyncio
    async def test_warm_populates_keys(
        self, cache_service: CacheService[Any], store: TTLCacheStore[Any]
    ) -> None:
        warmed = await cache_service.warm(
            {
                "stats:products": CountingProducer({"count": 120}),
                "ingredients:all": CountingProducer(["caffeine", "beta-alanine"]),
            }
        )

        assert warmed == 2
        assert store.get("stats:products") == {"count": 120}

    @pytest.mark.asyncio
    async def test_warm_skips_failures(
        self, cache_service: CacheService[Any], store: TTLCacheStore[Any]
    ) -> None:
        warmed = await cache_service.warm(
            {
                "ok": CountingProducer("v"),
                "broken": CountingProducer(error=ProducerError("boom")),
            }
        )

        assert warmed == 1
        assert store.has("ok")
        assert not store.has("broken")

    @pytest.mark.asyncio
    async def test_warm_nothing(self, cache_service: CacheService[Any]) -> None:
        assert await cache_service.warm({}) == 0
