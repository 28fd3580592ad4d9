"""Core domain layer for suppcache."""

from suppcache.core.entities import (
    AutocompleteConfig,
    CacheConfig,
    CacheEntry,
    CacheKey,
    CacheStats,
    PrefixIndex,
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
    AuthorityCache,
    AutocompleteService,
    CacheService,
    LeaderboardCache,
    ProductListCache,
    Vocabulary,
)

__all__ = [
    # Entities
    "CacheConfig",
    "AutocompleteConfig",
    "CacheEntry",
    "CacheKey",
    "CacheStats",
    "PrefixIndex",
    "ProductListQuery",
    # Interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IInvalidator",
    "IRoleStore",
    "IVocabularyStorage",
    # Services
    "CacheService",
    "ProductListCache",
    "LeaderboardCache",
    "AuthorityCache",
    "AutocompleteService",
    "Vocabulary",
]
