"""Selecting stored places by filter or by identifier lookup."""

from __future__ import annotations

from typing import Iterable, List

from placesync.entities.core import PlaceCategory, PlaceRecord


def filter_places(
    records: Iterable[PlaceRecord],
    *,
    category: PlaceCategory | None = None,
    status: str | None = None,
    source: str | None = None,
) -> List[PlaceRecord]:
    """Return the records matching every given filter, in repository order.

    Status and source compare case-insensitively; a record matches ``source``
    when any of its sources does.
    """

    status_key = status.strip().lower() if status else None
    source_key = source.strip().lower() if source else None
    selected: List[PlaceRecord] = []
    for record in records:
        if category is not None and record.category is not category:
            continue
        if status_key and record.status.lower() != status_key:
            continue
        if source_key and source_key not in {item.lower() for item in record.sources}:
            continue
        selected.append(record)
    return selected


def lookup_places(records: Iterable[PlaceRecord], query: str) -> List[PlaceRecord]:
    """Resolve ``query`` as a record id, falling back to a case-insensitive name.

    An id match wins outright. Several records may share a name, so every
    name match is returned.
    """

    key = query.strip()
    if not key:
        return []
    snapshot = list(records)
    for record in snapshot:
        if record.id == key:
            return [record]
    lowered = key.lower()
    return [record for record in snapshot if record.name.lower() == lowered]


__all__ = ["filter_places", "lookup_places"]
