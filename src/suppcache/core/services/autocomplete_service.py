"""Autocomplete over product, brand and flavor names."""

import asyncio
import logging
from collections.abc import Iterable
from enum import Enum

from suppcache.core.entities.cache_config import AutocompleteConfig
from suppcache.core.entities.prefix_index import PrefixIndex
from suppcache.core.interfaces.vocabulary_storage import IVocabularyStorage

logger = logging.getLogger(__name__)


class Vocabulary(str, Enum):
    """Name vocabularies served by autocomplete."""

    PRODUCTS = "products"
    BRANDS = "brands"
    FLAVORS = "flavors"


STATIC_SEED: dict[Vocabulary, tuple[str, ...]] = {
    Vocabulary.PRODUCTS: (
        "protein powder", "whey isolate", "casein protein", "creatine monohydrate",
        "bcaa powder", "eaa powder", "pre workout", "fat burner", "mass gainer",
        "multivitamin", "omega-3", "fish oil", "vitamin d", "magnesium", "zinc",
        "jacked3d", "c4", "pre-jym", "superpump250", "gold standard",
    ),
    Vocabulary.BRANDS: (
        "optimum nutrition", "dymatize", "muscle tech", "bpi sports",
        "cellucor", "ghost", "quest nutrition", "gold standard",
        "isopure", "gnc", "vitamin shoppe", "nature made",
    ),
    Vocabulary.FLAVORS: (
        "vanilla", "chocolate", "strawberry", "banana", "cookies and cream",
        "mint chocolate chip", "peanut butter", "cinnamon", "unflavored",
        "tropical punch", "fruit punch", "blue raspberry", "green apple",
        "orange", "grape", "watermelon", "cherry", "lemon lime",
    ),
}


class AutocompleteService:
    """Starts-with search over the three name vocabularies.

    The indexes are rebuilt at start-up from the persisted snapshot, or
    from ``STATIC_SEED`` when the snapshot is missing or unreadable.
    New names are added in memory only; they reach durable storage when
    ``save`` is called at the end of an ingestion batch, or on
    ``shutdown``. Persistence problems are logged and never raised.
    """

    def __init__(
        self,
        storage: IVocabularyStorage,
        config: AutocompleteConfig | None = None,
    ) -> None:
        """Initialize the autocomplete service.

        Args:
            storage: Durable storage for the vocabularies.
            config: Optional configuration. Uses defaults if not provided.
        """
        self._storage = storage
        self._config = config or AutocompleteConfig()
        self._indexes: dict[Vocabulary, PrefixIndex] = {
            vocabulary: PrefixIndex() for vocabulary in Vocabulary
        }
        self._limits = {
            Vocabulary.PRODUCTS: self._config.product_limit,
            Vocabulary.BRANDS: self._config.brand_limit,
            Vocabulary.FLAVORS: self._config.flavor_limit,
        }
        self._seeded = False

    @property
    def seeded(self) -> bool:
        """True if the current indexes were built from the static seed."""
        return self._seeded

    async def initialize(self) -> None:
        """Build the indexes from storage, falling back to the static seed.

        The snapshot is used only if all three vocabularies load; a
        partially readable snapshot is discarded as a whole. Never raises.
        """
        try:
            snapshot = await asyncio.to_thread(self._read_snapshot)
        except Exception:
            logger.warning(
                "Autocomplete snapshot unavailable in %s, using static seed",
                self._storage.location,
                exc_info=True,
            )
            snapshot = None

        if snapshot is not None:
            self._indexes = {
                vocabulary: PrefixIndex(words) for vocabulary, words in snapshot.items()
            }
            self._seeded = False
            logger.info("Autocomplete initialized from %s", self._storage.location)
            return

        self._indexes = {
            vocabulary: PrefixIndex(words) for vocabulary, words in STATIC_SEED.items()
        }
        self._seeded = True
        logger.info("Autocomplete initialized with static seed")
        if self._config.save_seed_on_first_start:
            await self.save()

    def add(self, vocabulary: Vocabulary, name: str) -> bool:
        """Index one name. Not persisted until the next ``save``.

        Returns:
            True if the name was new.
        """
        return self._indexes[vocabulary].insert(name)

    def add_batch(self, vocabulary: Vocabulary, names: Iterable[str]) -> int:
        """Index many names from an ingestion run.

        Returns:
            Number of names that were new.
        """
        added = self._indexes[vocabulary].batch_insert(names)
        logger.debug("Added %d new %s", added, vocabulary.value)
        return added

    def search(self, vocabulary: Vocabulary, prefix: str, limit: int | None = None) -> list[str]:
        """Return names starting with ``prefix``.

        Args:
            vocabulary: Vocabulary to search.
            prefix: Case-insensitive prefix.
            limit: Maximum results; the vocabulary's default when None.

        Returns:
            Matching names, unranked.
        """
        if limit is None:
            limit = self._limits[vocabulary]
        return self._indexes[vocabulary].search_prefix(prefix, limit)

    def search_products(self, prefix: str, limit: int | None = None) -> list[str]:
        return self.search(Vocabulary.PRODUCTS, prefix, limit)

    def search_brands(self, prefix: str, limit: int | None = None) -> list[str]:
        return self.search(Vocabulary.BRANDS, prefix, limit)

    def search_flavors(self, prefix: str, limit: int | None = None) -> list[str]:
        return self.search(Vocabulary.FLAVORS, prefix, limit)

    async def save(self) -> bool:
        """Persist every vocabulary. Best effort.

        Returns:
            True if all vocabularies were written.
        """
        snapshot = {vocabulary: index.words() for vocabulary, index in self._indexes.items()}
        try:
            await asyncio.to_thread(self._write_snapshot, snapshot)
        except Exception:
            logger.exception("Failed to save autocomplete data to %s", self._storage.location)
            return False
        logger.info("Autocomplete data saved to %s", self._storage.location)
        return True

    async def shutdown(self) -> bool:
        """Flush the vocabularies on graceful shutdown."""
        return await self.save()

    def stats(self) -> dict[str, object]:
        stats: dict[str, object] = {
            vocabulary.value: len(index) for vocabulary, index in self._indexes.items()
        }
        stats["data_dir"] = self._storage.location
        return stats

    def _read_snapshot(self) -> dict[Vocabulary, list[str]] | None:
        if not all(self._storage.exists(vocabulary.value) for vocabulary in Vocabulary):
            return None
        return {vocabulary: self._storage.read(vocabulary.value) for vocabulary in Vocabulary}

    def _write_snapshot(self, snapshot: dict[Vocabulary, list[str]]) -> None:
        for vocabulary, words in snapshot.items():
            self._storage.write(vocabulary.value, words)
