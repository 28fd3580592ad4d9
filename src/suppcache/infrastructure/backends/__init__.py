"""Cache store implementations."""

from suppcache.infrastructure.backends.memory import TTLCacheStore
from suppcache.infrastructure.backends.roles import InMemoryRoleStore

__all__ = [
    "TTLCacheStore",
    "InMemoryRoleStore",
]
