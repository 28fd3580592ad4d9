"""Prefix index (trie) for autocomplete."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class _TrieNode:
    children: dict[str, "_TrieNode"] = field(default_factory=dict)
    terminal: bool = False


class PrefixIndex:
    """Trie of lowercase strings supporting starts-with lookups.

    Children are kept in insertion order, so the traversal order of
    ``search_prefix`` is deterministic for a given sequence of inserts.
    Results carry no ranking beyond "matches the prefix".
    """

    def __init__(self, words: Iterable[str] | None = None) -> None:
        self._root = _TrieNode()
        self._size = 0
        if words is not None:
            self.batch_insert(words)

    @staticmethod
    def normalize(text: str) -> str:
        """Case-fold and trim a string the way the index stores it."""
        return text.strip().lower()

    def insert(self, text: str) -> bool:
        """Insert a string into the index.

        Inserting the same string twice is a no-op. Blank strings are
        ignored.

        Args:
            text: The string to index.

        Returns:
            True if the string was not indexed before.
        """
        word = self.normalize(text)
        if not word:
            return False

        node = self._root
        for char in word:
            child = node.children.get(char)
            if child is None:
                child = _TrieNode()
                node.children[char] = child
            node = child

        if node.terminal:
            return False
        node.terminal = True
        self._size += 1
        return True

    def batch_insert(self, texts: Iterable[str]) -> int:
        """Insert many strings.

        Args:
            texts: Strings to index.

        Returns:
            Number of strings that were new to the index.
        """
        return sum(1 for text in texts if self.insert(text))

    def contains(self, text: str) -> bool:
        """Check whether an exact string is indexed."""
        node = self._find(self.normalize(text))
        return node is not None and node.terminal

    def search_prefix(self, prefix: str, limit: int) -> list[str]:
        """Collect indexed strings starting with ``prefix``.

        An unknown prefix yields an empty list, not an error.

        Args:
            prefix: Prefix to look up (case-insensitive).
            limit: Maximum number of results.

        Returns:
            Up to ``limit`` matching strings in depth-first order.
        """
        if limit <= 0:
            return []
        # Trailing whitespace is part of the prefix ("vanilla " skips "vanillas").
        start = prefix.lstrip().lower()
        node = self._find(start)
        if node is None:
            return []

        results: list[str] = []
        for word in self._walk(node, start):
            results.append(word)
            if len(results) >= limit:
                break
        return results

    def words(self) -> list[str]:
        """Return every indexed string."""
        return list(self._walk(self._root, ""))

    def clear(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.contains(text)

    def _find(self, path: str) -> _TrieNode | None:
        node = self._root
        for char in path:
            child = node.children.get(char)
            if child is None:
                return None
            node = child
        return node

    def _walk(self, node: _TrieNode, prefix: str) -> Iterator[str]:
        # Iterative pre-order DFS; reversed pushes keep children in order.
        stack: list[tuple[_TrieNode, str]] = [(node, prefix)]
        while stack:
            current, path = stack.pop()
            if current.terminal:
                yield path
            for char, child in reversed(list(current.children.items())):
                stack.append((child, path + char))
