"""Core interfaces (Protocol classes) for suppcache."""

from suppcache.core.interfaces.cache_store import ICacheStore
from suppcache.core.interfaces.invalidator import IInvalidator
from suppcache.core.interfaces.key_builder import IKeyBuilder
from suppcache.core.interfaces.role_store import IRoleStore
from suppcache.core.interfaces.serializer import ISerializer
from suppcache.core.interfaces.vocabulary_storage import IVocabularyStorage

__all__ = [
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    "IInvalidator",
    "IRoleStore",
    "IVocabularyStorage",
]
