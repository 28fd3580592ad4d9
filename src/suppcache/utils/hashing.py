"""Hashing and normalization helpers for cache key generation."""

import hashlib
import json
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Mappings hash the same regardless of key order.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    normalized = json.dumps(value, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def normalize_text(text: str) -> str:
    """Normalize free text so equivalent user input maps to one key.

    Collapses runs of whitespace and case-folds.

    Args:
        text: Raw text, e.g. a search box value.

    Returns:
        The normalized text, possibly empty.
    """
    return " ".join(text.split()).casefold()
