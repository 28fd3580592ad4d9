"""Product listing query value object."""

from dataclasses import dataclass, replace

from suppcache.utils.hashing import normalize_text

SORT_FIELDS = ("name", "created_at", "rating", "price")
SORT_ORDERS = ("asc", "desc")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100
DEFAULT_SORT = "created_at"
DEFAULT_ORDER = "desc"


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = normalize_text(str(value))
    return cleaned or None


@dataclass(frozen=True)
class ProductListQuery:
    """Parameters of a paginated product listing request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    category: str | None = None
    search: str | None = None
    sort: str = DEFAULT_SORT
    order: str = DEFAULT_ORDER

    def normalized(self, max_limit: int = MAX_LIMIT) -> "ProductListQuery":
        """Return an equivalent query with every field in its valid range.

        Out-of-range values are clamped instead of rejected so a cache key
        can always be formed: ``page`` to at least 1, ``limit`` to
        ``[1, max_limit]``, unknown sort fields and orders to the defaults.
        Text filters are whitespace-collapsed and case-folded, and empty
        strings count as absent.

        Args:
            max_limit: Largest page size accepted.

        Returns:
            The normalized query.
        """
        sort = str(self.sort).strip().lower() if self.sort else DEFAULT_SORT
        order = str(self.order).strip().lower() if self.order else DEFAULT_ORDER
        return replace(
            self,
            page=max(DEFAULT_PAGE, int(self.page)),
            limit=min(max(1, int(self.limit)), max_limit),
            category=_clean_text(self.category),
            search=_clean_text(self.search),
            sort=sort if sort in SORT_FIELDS else DEFAULT_SORT,
            order=order if order in SORT_ORDERS else DEFAULT_ORDER,
        )

    @property
    def offset(self) -> int:
        """Index of the first row of this page."""
        return (max(DEFAULT_PAGE, self.page) - 1) * max(1, self.limit)
