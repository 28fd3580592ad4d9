"""Durable storage for autocomplete vocabularies."""

from suppcache.infrastructure.storage.file import FileVocabularyStorage, StorageError

__all__ = ["FileVocabularyStorage", "StorageError"]
