"""File-based vocabulary storage."""

import logging
import os
import tempfile
from pathlib import Path

from suppcache.core.interfaces.serializer import ISerializer
from suppcache.infrastructure.serializers.json import JsonSerializer, SerializationError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a vocabulary snapshot cannot be read or written."""

    pass


class FileVocabularyStorage:
    """Stores each vocabulary as a JSON list in ``<data_dir>/<name>.json``.

    Writes go to a temporary file in the same directory which then
    replaces the snapshot in one ``os.replace`` call, so a failed write
    leaves the previous snapshot intact.
    """

    def __init__(
        self,
        data_dir: Path | str,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the storage.

        Args:
            data_dir: Directory holding the snapshots. Created on first write.
            serializer: Serializer for snapshots. Defaults to indented JSON.
        """
        self._data_dir = Path(data_dir)
        self._serializer = serializer or JsonSerializer(indent=2)

    @property
    def location(self) -> str:
        return str(self._data_dir)

    def path_for(self, name: str) -> Path:
        return self._data_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> list[str]:
        """Read a persisted vocabulary.

        Args:
            name: Vocabulary name.

        Returns:
            The persisted strings.

        Raises:
            StorageError: If the file is missing, unreadable or is not a
                JSON list of strings.
        """
        path = self.path_for(name)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        try:
            words = self._serializer.deserialize(data)
        except SerializationError as e:
            raise StorageError(f"Corrupt vocabulary file {path}: {e}") from e

        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise StorageError(f"Corrupt vocabulary file {path}: expected a list of strings")
        return words

    def write(self, name: str, words: list[str]) -> None:
        """Persist a vocabulary atomically.

        Args:
            name: Vocabulary name.
            words: Strings to persist.

        Raises:
            StorageError: If the snapshot could not be written.
        """
        path = self.path_for(name)
        try:
            payload = self._serializer.serialize(list(words))
        except SerializationError as e:
            raise StorageError(f"Cannot encode vocabulary {name}: {e}") from e

        tmp_name: str | None = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self._data_dir,
                prefix=f".{name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)

        logger.debug("Wrote %d words to %s", len(words), path)
