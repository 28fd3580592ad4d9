"""Cache configuration entities."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides the defaults used by the TTL store, the cache-aside loader
    and the domain caches built on top of them.

    Product listings:
        Only the first ``product_list_cached_pages`` pages are cached;
        deeper pages always go to the database.

    Leaderboards:
        A fixed ``leaderboard_size`` snapshot is cached whole and sliced
        for every page request.
    """

    enabled: bool = True
    default_ttl: timedelta | None = None
    max_size: int = 1000
    key_prefix: str | None = None

    # Product listings
    product_list_cached_pages: int = 2
    product_list_ttl: timedelta = timedelta(hours=1)
    max_page_size: int = 100

    # Leaderboards
    leaderboard_size: int = 75
    leaderboard_ttl: timedelta = timedelta(hours=24)

    def __post_init__(self) -> None:
        """Set default TTL if not provided and validate bounds."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(hours=1)
        if self.max_size < 1:
            raise ValueError("max_size must be a positive integer")
        if self.product_list_cached_pages < 0:
            raise ValueError("product_list_cached_pages must not be negative")
        if self.leaderboard_size < 1:
            raise ValueError("leaderboard_size must be a positive integer")


@dataclass
class AutocompleteConfig:
    """Autocomplete index configuration."""

    data_dir: Path | str = Path("data/autocomplete")
    product_limit: int = 25
    brand_limit: int = 15
    flavor_limit: int = 15
    save_seed_on_first_start: bool = True

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
