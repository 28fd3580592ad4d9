"""Infrastructure layer implementations for suppcache."""

from suppcache.infrastructure.backends import InMemoryRoleStore, TTLCacheStore
from suppcache.infrastructure.key_builders import DefaultKeyBuilder
from suppcache.infrastructure.serializers import JsonSerializer, SerializationError
from suppcache.infrastructure.storage import FileVocabularyStorage, StorageError

__all__ = [
    "TTLCacheStore",
    "InMemoryRoleStore",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SerializationError",
    "FileVocabularyStorage",
    "StorageError",
]
