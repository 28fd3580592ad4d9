"""Default key builder implementation."""

from typing import Any

from suppcache.core.entities.cache_key import CacheKey
from suppcache.core.entities.product_query import (
    DEFAULT_ORDER,
    DEFAULT_SORT,
    MAX_LIMIT,
    ProductListQuery,
)
from suppcache.utils.hashing import hash_value, normalize_text

PRODUCTS_NAMESPACE = "products"
SEARCH_NAMESPACE = "search"
LEADERBOARD_NAMESPACE = "leaderboard"


class DefaultKeyBuilder:
    """Default key builder producing readable, labeled keys.

    Structured parameters become ``label:value`` fragments; free-form
    payloads (search filters, function arguments) are hashed with
    SHA-256 so keys stay short.
    """

    def __init__(
        self,
        prefix: str | None = None,
        max_page_size: int = MAX_LIMIT,
    ) -> None:
        """Initialize the key builder.

        Args:
            prefix: Optional prefix for all cache keys.
            max_page_size: Largest page size accepted in listing keys.
        """
        self._prefix = prefix
        self._max_page_size = max_page_size

    @property
    def prefix(self) -> str | None:
        return self._prefix

    def build(self, namespace: str, **fragments: Any) -> str:
        """Build a canonical key for a namespace and labeled fragments.

        Args:
            namespace: Namespace tag, e.g. ``products``.
            **fragments: Labeled parameter values; None values are skipped.

        Returns:
            A unique string key.
        """
        return str(CacheKey.from_components(namespace, fragments, prefix=self._prefix))

    def scope(self, namespace: str) -> str:
        """Key prefix shared by every key of ``namespace``."""
        return CacheKey(namespace=namespace, prefix=self._prefix).scope

    def build_product_list_key(
        self,
        page: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
        sort: str = DEFAULT_SORT,
        order: str = DEFAULT_ORDER,
    ) -> str:
        """Build the key of one page of the product listing.

        Inputs are normalized first (see ``ProductListQuery.normalized``),
        so an out-of-range page maps to the key of the page it is served
        as, never to a key of its own.

        Returns:
            The cache key for that page.
        """
        query = ProductListQuery(
            page=page,
            limit=limit,
            category=category,
            search=search,
            sort=sort,
            order=order,
        )
        return self.build_product_query_key(query)

    def build_product_query_key(self, query: ProductListQuery) -> str:
        """Build the listing key for an already assembled query."""
        q = query.normalized(self._max_page_size)
        return self.build(
            PRODUCTS_NAMESPACE,
            page=q.page,
            limit=q.limit,
            sort=q.sort,
            order=q.order,
            category=q.category,
            search=q.search,
        )

    def build_search_key(self, query: str, filters: dict[str, Any] | None = None) -> str:
        """Build the key of a free-text product search.

        Args:
            query: Search text; whitespace and case are normalized.
            filters: Arbitrary JSON-serializable filters.

        Returns:
            The cache key for that search.
        """
        return self.build(
            SEARCH_NAMESPACE,
            q=hash_value(normalize_text(query)),
            f=hash_value(filters) if filters else None,
        )

    def build_leaderboard_key(self, board: str, size: int) -> str:
        """Build the key of a whole top-N snapshot."""
        return self.build(LEADERBOARD_NAMESPACE, board=board, top=size)

    def build_call_key(
        self,
        module: str,
        name: str,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> str:
        """Build cache key for a decorated function call.

        Args:
            module: Module of the function.
            name: Function name.
            args: Positional arguments.
            kwargs: Keyword arguments.

        Returns:
            A unique string key for the call.
        """
        return self.build(
            "call",
            fn=f"{module}.{name}" if module else name,
            a=hash_value(list(args)) if args else None,
            k=hash_value(kwargs) if kwargs else None,
        )

    def product(self, product_id: str | int) -> str:
        return self.build("product", id=product_id)

    def user(self, user_id: str) -> str:
        return self.build("user", id=user_id)

    def contribution(self, contribution_id: str | int) -> str:
        return self.build("contribution", id=contribution_id)

    def rankings(self, kind: str, category: str | None = None) -> str:
        return self.build("rankings", kind=kind, category=category or "all")
