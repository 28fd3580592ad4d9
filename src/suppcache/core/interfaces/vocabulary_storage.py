"""Vocabulary storage interface."""

from typing import Protocol


class IVocabularyStorage(Protocol):
    """Contract for durable storage of autocomplete vocabularies.

    Each vocabulary is a flat list of strings. ``write`` followed by
    ``read`` must yield the same set of strings.
    """

    def read(self, name: str) -> list[str]:
        """Read a persisted vocabulary.

        Args:
            name: Vocabulary name, e.g. ``products``.

        Returns:
            The persisted strings.

        Raises:
            StorageError: If the vocabulary is missing or unreadable.
        """
        ...

    def write(self, name: str, words: list[str]) -> None:
        """Persist a vocabulary, replacing the previous snapshot.

        Args:
            name: Vocabulary name.
            words: Strings to persist.

        Raises:
            StorageError: If the snapshot could not be written.
        """
        ...

    def exists(self, name: str) -> bool:
        """Check whether a snapshot exists for a vocabulary."""
        ...

    @property
    def location(self) -> str:
        """Human readable location of the snapshots."""
        ...
