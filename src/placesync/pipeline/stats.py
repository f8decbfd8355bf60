"""Summary counts over stored places."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

from pydantic import BaseModel, Field

from placesync.entities.core import PlaceRecord


class PlaceStats(BaseModel):
    total: int = 0
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_source: Dict[str, int] = Field(default_factory=dict)


def compute_place_stats(records: Iterable[PlaceRecord]) -> PlaceStats:
    """Count places per category, status and source.

    Records without a category are counted in ``total`` only. A record with
    several sources counts once towards each of them.
    """

    total = 0
    categories: Counter[str] = Counter()
    statuses: Counter[str] = Counter()
    sources: Counter[str] = Counter()
    for record in records:
        total += 1
        if record.category is not None:
            categories[record.category.value] += 1
        if record.status:
            statuses[record.status] += 1
        sources.update(record.sources)
    return PlaceStats(
        total=total,
        by_category=dict(categories),
        by_status=dict(statuses),
        by_source=dict(sources),
    )


__all__ = ["PlaceStats", "compute_place_stats"]
