"""Note Statistics — pure aggregation over a user's notes for the data export.

Invariants:
    - Null/empty category buckets under UNCATEGORIZED
    - Input is any iterable of objects with `category` and `is_pinned` (ORM rows or test doubles)
"""

from collections import Counter
from typing import Iterable, Protocol

from mini_notes.core.domain_types import UNCATEGORIZED


class _NoteLike(Protocol):
    category: str | None
    is_pinned: bool


def category_counts(notes: Iterable[_NoteLike]) -> dict[str, int]:
    counts = Counter(note.category or UNCATEGORIZED for note in notes)
    return dict(counts)


def export_statistics(notes: list[_NoteLike]) -> dict:
    """Statistics block embedded in the portability export."""
    return {
        "totalNotes": len(notes),
        "pinnedNotes": sum(1 for note in notes if note.is_pinned),
        "categoryCounts": category_counts(notes),
    }
