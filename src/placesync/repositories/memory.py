"""List-backed repository used by tests and dry runs."""

from __future__ import annotations

from typing import Dict, Iterable, List

from placesync.entities.core import PlaceRecord, PlaceStatus, PlaceUpdate, VisitLog
from placesync.errors import RecordNotFoundError
from placesync.utils.logging import get_logger


_LOGGER = get_logger(module=__name__)


class InMemoryPlacesRepository:
    """Keep places in insertion order and hand out deep copies.

    Every ``create`` assigns a fresh ``place-NNNN`` identifier; any ``id`` on
    the incoming record is ignored.
    """

    def __init__(self, records: Iterable[PlaceRecord] | None = None) -> None:
        self._records: List[PlaceRecord] = []
        self._visits: Dict[str, List[VisitLog]] = {}
        self._counter = 0
        for record in records or ():
            self.create(record)

    def __len__(self) -> int:
        return len(self._records)

    def _next_id(self) -> str:
        self._counter += 1
        return f"place-{self._counter:04d}"

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(record_id)

    def list_all(self) -> List[PlaceRecord]:
        return [record.model_copy(deep=True) for record in self._records]

    def get(self, record_id: str) -> PlaceRecord:
        return self._records[self._index_of(record_id)].model_copy(deep=True)

    def visits(self, record_id: str) -> List[VisitLog]:
        self._index_of(record_id)
        return [visit.model_copy(deep=True) for visit in self._visits.get(record_id, [])]

    def create(self, record: PlaceRecord) -> PlaceRecord:
        stored = record.model_copy(update={"id": self._next_id()}, deep=True)
        self._records.append(stored)
        _LOGGER.debug("Stored place", record_id=stored.id, name=stored.name)
        return stored.model_copy(deep=True)

    def update(self, record_id: str, changes: PlaceUpdate) -> PlaceRecord:
        index = self._index_of(record_id)
        updated = self._records[index].apply(changes)
        self._records[index] = updated
        _LOGGER.debug(
            "Updated place",
            record_id=record_id,
            fields=sorted(changes.changed_fields()),
        )
        return updated.model_copy(deep=True)

    def append_visit(self, record_id: str, visit: VisitLog) -> PlaceRecord:
        self._index_of(record_id)
        self._visits.setdefault(record_id, []).append(visit.model_copy(deep=True))
        return self.update(record_id, PlaceUpdate(status=PlaceStatus.VISITED.value))


__all__ = ["InMemoryPlacesRepository"]
