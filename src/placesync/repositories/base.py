"""Storage abstraction consumed by the deduplication engine."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from placesync.entities.core import PlaceRecord, PlaceUpdate, VisitLog
from placesync.errors import RecordNotFoundError, RepositoryError


@runtime_checkable
class PlacesRepository(Protocol):
    """Collection of stored places.

    Implementations raise :class:`RepositoryError` (or a subclass) on failure
    and :class:`RecordNotFoundError` when ``update`` or ``append_visit``
    targets an unknown id.
    """

    def list_all(self) -> List[PlaceRecord]:
        """Return every stored record in a stable enumeration order."""
        ...

    def create(self, record: PlaceRecord) -> PlaceRecord:
        """Persist a new record and return it with its assigned ``id``."""
        ...

    def update(self, record_id: str, changes: PlaceUpdate) -> PlaceRecord:
        """Apply ``changes`` to an existing record and return the stored result."""
        ...

    def append_visit(self, record_id: str, visit: VisitLog) -> PlaceRecord:
        """Record ``visit`` against an existing place and mark it as visited."""
        ...


__all__ = ["PlacesRepository", "RepositoryError", "RecordNotFoundError"]
