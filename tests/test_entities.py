from datetime import date

import pytest
from pydantic import ValidationError

from placesync.entities.core import (
    Location,
    MatchResult,
    PlaceCategory,
    PlaceRecord,
    PlaceStatus,
    PlaceUpdate,
    VisitLog,
)


def test_place_name_is_trimmed_and_required():
    assert PlaceRecord(name="  Shore Temple ").name == "Shore Temple"
    with pytest.raises(ValidationError):
        PlaceRecord(name="   ")


def test_sources_are_deduplicated_in_first_seen_order():
    record = PlaceRecord(name="Hampi", sources=["Twitter", "", "Manual", "Twitter", " Manual "])

    assert record.sources == ["Twitter", "Manual"]


def test_temple_types_cleared_for_other_categories():
    museum = PlaceRecord(name="Salar Jung", category="Museum", temple_types=["Divya Desam"])
    temple = PlaceRecord(name="Srirangam", category="temple", temple_types=["Divya Desam", "Divya Desam"])

    assert museum.temple_types == []
    assert temple.category is PlaceCategory.TEMPLE
    assert temple.temple_types == ["Divya Desam"]


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError):
        PlaceRecord(name="Hampi", category="Spaceport")
    assert PlaceCategory.parse("tourist attraction") is PlaceCategory.TOURIST_ATTRACTION


def test_status_defaults_and_accepts_enum():
    assert PlaceRecord(name="Hampi").status == "Want to go"
    assert PlaceRecord(name="Hampi", status=PlaceStatus.VISITED).status == "Visited"


def test_location_requires_valid_coordinates():
    with pytest.raises(ValidationError):
        Location(lat=91.0, lon=0.0)
    with pytest.raises(ValidationError):
        Location(lat=10.0)  # type: ignore[call-arg]
    location = Location(lat=10.0, lon=20.0, address="  ")
    assert location.address is None


def test_apply_update_keeps_identifier_and_unset_fields():
    record = PlaceRecord(id="page-1", name="Hampi", url="https://maps.example/h", sources=["Manual"])

    updated = record.apply(PlaceUpdate(sources=["Manual", "Twitter"], city="Hampi"))

    assert updated.id == "page-1"
    assert updated.url == "https://maps.example/h"
    assert updated.sources == ["Manual", "Twitter"]
    assert updated.city == "Hampi"


def test_place_update_reports_only_populated_fields():
    update = PlaceUpdate(url="https://maps.example/h")

    assert update.changed_fields() == {"url": "https://maps.example/h"}
    assert PlaceUpdate().is_empty()


def test_match_result_exposes_record_id():
    match = MatchResult(record=PlaceRecord(id="page-9", name="Hampi"), score=72.5, reasons=["Exact URL match"])

    assert match.candidate_record_id == "page-9"
    with pytest.raises(ValidationError):
        MatchResult(record=PlaceRecord(name="Hampi"), score=120)


def test_place_status_parse_is_case_insensitive():
    assert PlaceStatus.parse(" visited ") is PlaceStatus.VISITED
    assert PlaceStatus.parse("WANT TO GO") is PlaceStatus.WANT_TO_GO
    with pytest.raises(ValueError):
        PlaceStatus.parse("Someday")


def test_visit_log_cleans_fields():
    visit = VisitLog(
        visited_on=date(2024, 1, 14),
        cost="  ",
        notes=" Sunrise darshan ",
        photos=["", "https://img.example/1", "https://img.example/1"],
    )

    assert visit.cost is None
    assert visit.notes == "Sunrise darshan"
    assert visit.photos == ["https://img.example/1"]
    assert VisitLog().visited_on == date.today()
