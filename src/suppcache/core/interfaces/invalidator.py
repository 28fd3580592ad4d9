"""Cache invalidator interface."""

from typing import Protocol


class IInvalidator(Protocol):
    """Contract for explicit cache invalidation.

    Called by business logic after authoritative data changed, so that
    long-lived entries are dropped instead of waiting for their TTL.
    """

    def invalidate(self, scope: str) -> int:
        """Invalidate cache entries by key scope.

        Args:
            scope: Key prefix, or a glob pattern.

        Returns:
            Number of entries invalidated.
        """
        ...

    def invalidate_tags(self, tags: list[str]) -> int:
        """Invalidate cache entries by dependency tags.

        Args:
            tags: Tags to invalidate.

        Returns:
            Number of entries invalidated.
        """
        ...
