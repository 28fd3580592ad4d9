"""Key builder interface."""

from typing import Any, Protocol


class IKeyBuilder(Protocol):
    """Contract for building cache keys from structured parameters.

    Key builders must be deterministic: logically identical parameters
    always produce byte-identical keys.
    """

    def build(self, namespace: str, **fragments: Any) -> str:
        """Build a canonical key for a namespace and labeled fragments.

        Args:
            namespace: Namespace tag, e.g. ``products``.
            **fragments: Labeled parameter values; None values are skipped.

        Returns:
            A unique string key.
        """
        ...

    def build_product_list_key(
        self,
        page: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
        sort: str = "created_at",
        order: str = "desc",
    ) -> str:
        """Build the key of one page of the product listing.

        Args:
            page: Page number; clamped to at least 1.
            limit: Page size; clamped to the allowed range.
            category: Optional category filter.
            search: Optional search text.
            sort: Sort field.
            order: Sort order.

        Returns:
            The cache key for that page.
        """
        ...
