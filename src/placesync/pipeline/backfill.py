"""Repository-wide enrichment passes over previously stored places."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from placesync.entities.core import PlaceCategory, PlaceUpdate
from placesync.enrichment.address import extract_city, extract_country
from placesync.enrichment.temples import classify
from placesync.repositories.base import PlacesRepository
from placesync.utils.helpers import ordered_unique
from placesync.utils.logging import get_logger, logging_context


_LOGGER = get_logger(module=__name__)


@dataclass
class BackfillReport:
    """Counts and per-record changes produced by one backfill pass."""

    examined: int = 0
    updated: int = 0
    unchanged: int = 0
    changes: Dict[str, Dict[str, object]] = field(default_factory=dict)

    def record_update(self, record_id: str, update: PlaceUpdate) -> None:
        self.updated += 1
        self.changes[record_id] = update.changed_fields()


def backfill_city_country(repository: PlacesRepository) -> BackfillReport:
    """Derive city and country from each stored address.

    Only records with a location address are examined, and only fields whose
    derived value differs from the stored one are written.
    """

    report = BackfillReport()
    with logging_context(step="backfill_city_country"):
        for record in repository.list_all():
            address = record.address
            if not address or record.id is None:
                continue
            report.examined += 1
            update = PlaceUpdate()
            city = extract_city(address)
            country = extract_country(address)
            if city and city != record.city:
                update.city = city
            if country and country != record.country:
                update.country = country
            if update.is_empty():
                report.unchanged += 1
                continue
            repository.update(record.id, update)
            report.record_update(record.id, update)
            _LOGGER.info(
                "Backfilled city and country",
                record_id=record.id,
                name=record.name,
                previous_city=record.city,
                city=update.city,
                country=update.country,
            )
        _LOGGER.info("City and country backfill finished", examined=report.examined, updated=report.updated)
    return report


def classify_temples(repository: PlacesRepository) -> BackfillReport:
    """Add missing classification tags to every stored Temple record."""

    report = BackfillReport()
    with logging_context(step="classify_temples"):
        for record in repository.list_all():
            if record.category is not PlaceCategory.TEMPLE or record.id is None:
                continue
            report.examined += 1
            tags = classify(record.name, record.address)
            new_tags: List[str] = [tag for tag in tags if tag not in record.temple_types]
            if not new_tags:
                report.unchanged += 1
                continue
            update = PlaceUpdate(temple_types=ordered_unique([*record.temple_types, *new_tags]))
            repository.update(record.id, update)
            report.record_update(record.id, update)
            _LOGGER.info("Classified temple", record_id=record.id, name=record.name, added=new_tags)
        _LOGGER.info("Temple classification finished", examined=report.examined, updated=report.updated)
    return report


__all__ = ["BackfillReport", "backfill_city_country", "classify_temples"]
