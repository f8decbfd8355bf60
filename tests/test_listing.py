"""Tests for filtering and looking up stored places."""

from __future__ import annotations

from placesync.entities.core import PlaceCategory, PlaceRecord
from placesync.pipeline.listing import filter_places, lookup_places


def make_place(name: str, **fields) -> PlaceRecord:
    return PlaceRecord(name=name, **fields)


def sample_places() -> list[PlaceRecord]:
    return [
        make_place("Shore Temple", id="p1", category="Temple", sources=["Manual"]),
        make_place("Salar Jung Museum", id="p2", category="Museum", status="Visited", sources=["Twitter"]),
        make_place("Kailasa Temple", id="p3", category="Temple", status="Visited", sources=["Text Import", "Twitter"]),
        make_place("Shore Temple", id="p4", sources=["Manual"]),
    ]


def test_filter_without_criteria_keeps_everything():
    assert [place.id for place in filter_places(sample_places())] == ["p1", "p2", "p3", "p4"]


def test_filter_combines_criteria():
    places = sample_places()

    assert [p.id for p in filter_places(places, category=PlaceCategory.TEMPLE)] == ["p1", "p3"]
    assert [p.id for p in filter_places(places, status="visited")] == ["p2", "p3"]
    assert [p.id for p in filter_places(places, source="twitter")] == ["p2", "p3"]
    assert [p.id for p in filter_places(places, category=PlaceCategory.TEMPLE, source="Twitter")] == ["p3"]


def test_lookup_prefers_id_then_name():
    places = sample_places()

    assert [p.id for p in lookup_places(places, "p2")] == ["p2"]
    assert [p.id for p in lookup_places(places, " kailasa temple ")] == ["p3"]
    assert [p.id for p in lookup_places(places, "Shore Temple")] == ["p1", "p4"]
    assert lookup_places(places, "Hampi") == []
    assert lookup_places(places, "  ") == []
