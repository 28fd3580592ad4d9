"""suppcache - in-process caching for the supplement catalog service.

TTL-bounded stores, cache-aside loading, domain caches for product
listings, leaderboards and admin/owner roles, and a persisted prefix
index for name autocomplete.

Example:
    from datetime import timedelta

    from suppcache import (
        CacheConfig,
        CacheService,
        DefaultKeyBuilder,
        ProductListCache,
        ProductListQuery,
        TTLCacheStore,
    )

    config = CacheConfig(default_ttl=timedelta(minutes=10))
    key_builder = DefaultKeyBuilder()
    service = CacheService(
        store=TTLCacheStore(maxsize=500, default_ttl=config.default_ttl),
        key_builder=key_builder,
        config=config,
    )
    products = ProductListCache(service, key_builder, cached_pages=2)

    async def list_products(page: int, category: str | None = None):
        query = ProductListQuery(page=page, category=category)
        return await products.get_or_load(query, lambda: db.fetch_page(query))

Invalidation after a mutation:
    @invalidates(service, scopes=["product:{id}", "products:"])
    async def update_product(id: str, data: dict) -> dict:
        return await db.update_product(id, data)
"""

from suppcache.container import CacheContainer
from suppcache.core.entities import (
    AutocompleteConfig,
    Authority,
    CacheConfig,
    CacheEntry,
    CacheKey,
    CacheStats,
    PrefixIndex,
    PrivilegedPrincipal,
    ProductListQuery,
)
from suppcache.core.interfaces import (
    ICacheStore,
    IInvalidator,
    IKeyBuilder,
    IRoleStore,
    ISerializer,
    IVocabularyStorage,
)
from suppcache.core.services import (
    STATIC_SEED,
    AuthorityCache,
    AutocompleteService,
    CacheService,
    LeaderboardCache,
    ProductListCache,
    Vocabulary,
)
from suppcache.decorators import cached, invalidates
from suppcache.infrastructure import (
    DefaultKeyBuilder,
    FileVocabularyStorage,
    InMemoryRoleStore,
    JsonSerializer,
    SerializationError,
    StorageError,
    TTLCacheStore,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "AutocompleteConfig",
    "CacheEntry",
    "CacheKey",
    "CacheStats",
    "ProductListQuery",
    "Authority",
    "PrivilegedPrincipal",
    "PrefixIndex",
    # Core interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IInvalidator",
    "IRoleStore",
    "IVocabularyStorage",
    # Core services
    "CacheService",
    "ProductListCache",
    "LeaderboardCache",
    "AuthorityCache",
    "AutocompleteService",
    "Vocabulary",
    "STATIC_SEED",
    # Infrastructure implementations
    "TTLCacheStore",
    "InMemoryRoleStore",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SerializationError",
    "FileVocabularyStorage",
    "StorageError",
    # Composition root
    "CacheContainer",
    # Decorators
    "cached",
    "invalidates",
]
