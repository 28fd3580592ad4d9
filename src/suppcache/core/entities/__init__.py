"""Domain entities for suppcache."""

from suppcache.core.entities.authority import (
    PRIVILEGED_ROLES,
    ROLE_ADMIN,
    ROLE_OWNER,
    Authority,
    PrivilegedPrincipal,
)
from suppcache.core.entities.cache_config import AutocompleteConfig, CacheConfig
from suppcache.core.entities.cache_entry import CacheEntry
from suppcache.core.entities.cache_key import CacheKey
from suppcache.core.entities.cache_stats import CacheStats
from suppcache.core.entities.prefix_index import PrefixIndex
from suppcache.core.entities.product_query import ProductListQuery

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CacheConfig",
    "CacheStats",
    "AutocompleteConfig",
    # Domain caches
    "ProductListQuery",
    "Authority",
    "PrivilegedPrincipal",
    "PRIVILEGED_ROLES",
    "ROLE_ADMIN",
    "ROLE_OWNER",
    # Autocomplete
    "PrefixIndex",
]
