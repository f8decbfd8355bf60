"""General-purpose helpers shared across placesync modules."""

from __future__ import annotations

import re
from typing import Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)
_WORD_BOUNDARY_PATTERN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace into single spaces."""

    return _WORD_BOUNDARY_PATTERN.sub(" ", text.strip())


def ordered_unique(items: Iterable[T]) -> List[T]:
    """Return items with duplicates removed, keeping first-seen order."""

    return list(dict.fromkeys(items))


def clean_optional_text(value: str | None) -> str | None:
    """Trim a free-text value, mapping blank strings to ``None``."""

    if value is None:
        return None
    cleaned = normalize_whitespace(value)
    return cleaned or None


__all__ = ["normalize_whitespace", "ordered_unique", "clean_optional_text"]
