"""Apply the configured enrichment steps to a candidate record."""

from __future__ import annotations

from placesync.config.policies import EnrichmentPolicy
from placesync.entities.core import PlaceRecord

from .address import parse_address
from .temples import enhance_temple_metadata


def enrich_record(
    record: PlaceRecord,
    policy: EnrichmentPolicy | None = None,
    *,
    address: str | None = None,
) -> PlaceRecord:
    """Fill missing city and country from the address and classify temples.

    ``address`` stands in for the location address when the record has no
    coordinates to carry one.
    """

    policy = policy or EnrichmentPolicy()
    address = record.address or address
    if policy.derive_city_country and address:
        components = parse_address(address)
        updates = {}
        if not record.city:
            updates["city"] = components.city
        if not record.country:
            updates["country"] = components.country
        updates = {key: value for key, value in updates.items() if value}
        if updates:
            record = record.model_copy(update=updates)
    if policy.classify_temples_on_add:
        record = enhance_temple_metadata(record, address=address)
    return record


__all__ = ["enrich_record"]
