"""Process-wide cache composition root.

One ``CacheContainer`` is created at process start and handed to the
request handlers that need it; nothing in suppcache is a module-level
singleton.

Example:
    container = CacheContainer.create(
        config=CacheConfig(),
        role_loader=fetch_admins_and_owners,
        autocomplete_config=AutocompleteConfig(data_dir="./data/autocomplete"),
    )
    await container.startup()
    ...
    await container.shutdown()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from suppcache.core.entities.cache_config import AutocompleteConfig, CacheConfig
from suppcache.core.interfaces.role_store import IRoleStore
from suppcache.core.interfaces.vocabulary_storage import IVocabularyStorage
from suppcache.core.services.authority_cache import AuthorityCache, RoleLoader
from suppcache.core.services.autocomplete_service import AutocompleteService
from suppcache.core.services.cache_service import CacheService
from suppcache.core.services.leaderboard_cache import LeaderboardCache
from suppcache.core.services.product_list_cache import ProductListCache
from suppcache.infrastructure.backends.memory import TTLCacheStore
from suppcache.infrastructure.backends.roles import InMemoryRoleStore
from suppcache.infrastructure.key_builders.default import DefaultKeyBuilder
from suppcache.infrastructure.storage.file import FileVocabularyStorage

logger = logging.getLogger(__name__)


@dataclass
class CacheContainer:
    """Owns every cache instance of one process."""

    config: CacheConfig
    key_builder: DefaultKeyBuilder
    cache: CacheService[Any]
    products: ProductListCache[Any]
    authority: AuthorityCache
    autocomplete: AutocompleteService
    leaderboard_service: CacheService[list[Any]]
    _leaderboards: dict[str, LeaderboardCache[Any]] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config: CacheConfig,
        role_loader: RoleLoader,
        autocomplete_config: AutocompleteConfig | None = None,
        storage: IVocabularyStorage | None = None,
        role_store_factory: Callable[[], IRoleStore] = InMemoryRoleStore,
    ) -> "CacheContainer":
        """Build the caches of one process.

        Args:
            config: Cache configuration.
            role_loader: Coroutine function returning admins and owners.
            autocomplete_config: Autocomplete configuration.
            storage: Vocabulary storage. Files under the configured data
                directory if None.
            role_store_factory: Builds the role store behind the authority cache.

        Returns:
            A container whose caches are empty until ``startup``.
        """
        autocomplete_config = autocomplete_config or AutocompleteConfig()
        key_builder = DefaultKeyBuilder(
            prefix=config.key_prefix,
            max_page_size=config.max_page_size,
        )

        def service(maxsize: int) -> CacheService[Any]:
            store: TTLCacheStore[Any] = TTLCacheStore(
                maxsize=maxsize,
                default_ttl=config.default_ttl,
            )
            return CacheService(store=store, key_builder=key_builder, config=config)

        cache = service(config.max_size)
        product_service = service(config.max_size)
        leaderboard_service = service(config.max_size)

        return cls(
            config=config,
            key_builder=key_builder,
            cache=cache,
            products=ProductListCache(
                service=product_service,
                key_builder=key_builder,
                cached_pages=config.product_list_cached_pages,
                ttl=config.product_list_ttl,
            ),
            authority=AuthorityCache(
                loader=role_loader,
                store_factory=role_store_factory,
            ),
            autocomplete=AutocompleteService(
                storage=storage or FileVocabularyStorage(autocomplete_config.data_dir),
                config=autocomplete_config,
            ),
            leaderboard_service=leaderboard_service,
        )

    def leaderboard(self, board: str) -> LeaderboardCache[Any]:
        """Return the snapshot cache of a named leaderboard."""
        cache = self._leaderboards.get(board)
        if cache is None:
            cache = LeaderboardCache(
                service=self.leaderboard_service,
                key_builder=self.key_builder,
                board=board,
                size=self.config.leaderboard_size,
                ttl=self.config.leaderboard_ttl,
            )
            self._leaderboards[board] = cache
        return cache

    async def startup(self) -> None:
        """Warm start: load the autocomplete index and the role cache.

        A failing role loader propagates; the autocomplete index never
        fails to start.
        """
        await self.autocomplete.initialize()
        await self.authority.cold_start()
        logger.info("Caches started")

    async def shutdown(self) -> None:
        """Flush the autocomplete vocabulary and drop in-memory caches."""
        await self.autocomplete.shutdown()
        self.cache.clear()
        self.products.clear()
        self.leaderboard_service.clear()
        logger.info("Caches shut down")
