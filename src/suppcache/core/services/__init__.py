"""Domain services for suppcache."""

from suppcache.core.services.authority_cache import AuthorityCache
from suppcache.core.services.autocomplete_service import (
    STATIC_SEED,
    AutocompleteService,
    Vocabulary,
)
from suppcache.core.services.cache_service import CacheService
from suppcache.core.services.leaderboard_cache import LeaderboardCache
from suppcache.core.services.product_list_cache import ProductListCache

__all__ = [
    "CacheService",
    # Domain caches
    "ProductListCache",
    "LeaderboardCache",
    "AuthorityCache",
    # Autocomplete
    "AutocompleteService",
    "Vocabulary",
    "STATIC_SEED",
]
