"""Cache key value object."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

NAMESPACE_SEPARATOR = ":"
FRAGMENT_SEPARATOR = "|"


def encode_fragment_value(value: Any) -> str:
    """Render a fragment value so it can never contain a separator.

    Args:
        value: The raw fragment value.

    Returns:
        The percent-encoded string form of the value.
    """
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


@dataclass(frozen=True)
class CacheKey:
    """Immutable domain cache key.

    A namespace tag followed by ordered, labeled fragments, e.g.
    ``products:page:2|limit:25|sort:name|order:asc|category:protein``.
    Fragment values are percent-encoded, so two distinct fragment lists
    always render to distinct strings.
    """

    namespace: str
    fragments: tuple[tuple[str, str], ...] = ()
    prefix: str | None = None

    def __str__(self) -> str:
        """Return the full cache key string.

        Returns:
            The complete cache key as a string.
        """
        head = self.namespace
        if self.prefix:
            head = f"{self.prefix}{NAMESPACE_SEPARATOR}{head}"
        if not self.fragments:
            return head
        body = FRAGMENT_SEPARATOR.join(
            f"{label}{NAMESPACE_SEPARATOR}{value}" for label, value in self.fragments
        )
        return f"{head}{NAMESPACE_SEPARATOR}{body}"

    @property
    def scope(self) -> str:
        """Prefix shared by every key of this namespace.

        Suitable for ``CacheService.invalidate``.
        """
        head = self.namespace
        if self.prefix:
            head = f"{self.prefix}{NAMESPACE_SEPARATOR}{head}"
        return f"{head}{NAMESPACE_SEPARATOR}"

    @classmethod
    def from_components(
        cls,
        namespace: str,
        fragments: dict[str, Any] | None = None,
        prefix: str | None = None,
    ) -> "CacheKey":
        """Create a CacheKey from raw components.

        Fragments whose value is None are dropped; the remaining ones keep
        the mapping's order.

        Args:
            namespace: Namespace tag, e.g. ``products``.
            fragments: Labeled parameter values.
            prefix: Optional global key prefix.

        Returns:
            A new CacheKey instance.
        """
        items = fragments or {}
        return cls(
            namespace=namespace,
            fragments=tuple(
                (label, encode_fragment_value(value))
                for label, value in items.items()
                if value is not None
            ),
            prefix=prefix,
        )
