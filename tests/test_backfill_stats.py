from placesync.entities.core import Location, PlaceRecord
from placesync.pipeline.backfill import backfill_city_country, classify_temples
from placesync.pipeline.stats import compute_place_stats
from placesync.repositories.memory import InMemoryPlacesRepository


def make_place(name: str, *, address: str | None = None, **fields) -> PlaceRecord:
    location = Location(lat=10.0, lon=79.0, address=address) if address else None
    return PlaceRecord(name=name, location=location, **fields)


def test_backfill_city_country_updates_only_differences():
    repo = InMemoryPlacesRepository(
        [
            make_place("Big Temple", address="Membalam Rd, Thanjavur 613001, India"),
            make_place("Hampi", address="8FJC+Q26, Hampi, Karnataka 583239, India", city="Hampi", country="India"),
            make_place("Shore Temple", address="Mahabalipuram, Tamil Nadu 603104, India", city="Chennai"),
            make_place("No Address"),
        ]
    )

    report = backfill_city_country(repo)

    assert (report.examined, report.updated, report.unchanged) == (3, 2, 1)
    assert report.changes["place-0001"] == {"city": "Thanjavur", "country": "India"}
    assert report.changes["place-0003"] == {"city": "Mahabalipuram", "country": "India"}
    assert repo.get("place-0003").city == "Mahabalipuram"


def test_classify_temples_unions_new_tags():
    repo = InMemoryPlacesRepository(
        [
            make_place("Rameswaram Temple", category="Temple", temple_types=["Custom"]),
            make_place("Srirangam Temple", category="Temple", temple_types=["Divya Desam"]),
            make_place("Lotus Temple", category="Temple"),
            make_place("Rameswaram Museum", category="Museum"),
        ]
    )

    report = classify_temples(repo)

    assert (report.examined, report.updated, report.unchanged) == (3, 1, 2)
    assert repo.get("place-0001").temple_types == ["Custom", "Jyotirlinga", "Char Dham"]
    assert repo.get("place-0004").temple_types == []


def test_compute_place_stats():
    records = [
        PlaceRecord(name="A", category="Temple", sources=["Manual", "Twitter"]),
        PlaceRecord(name="B", category="Temple", status="Visited", sources=["Twitter"]),
        PlaceRecord(name="C"),
    ]

    stats = compute_place_stats(records)

    assert stats.total == 3
    assert stats.by_category == {"Temple": 2}
    assert stats.by_status == {"Want to go": 2, "Visited": 1}
    assert stats.by_source == {"Twitter": 2, "Manual": 1}
    assert compute_place_stats([]).total == 0
