"""Tests for create/merge/skip resolution and batch imports."""

from __future__ import annotations

import pytest
from loguru import logger

from placesync.entities.core import Location, PlaceCategory, PlaceRecord, PlaceUpdate
from placesync.errors import RepositoryError, UnidentifiedRecordError
from placesync.pipeline.deduplication import (
    MergeOptions,
    MergeResolver,
    ResolveAction,
    batch_import_places,
    build_merge_update,
)
from placesync.repositories.memory import InMemoryPlacesRepository


def make_place(name: str, **fields) -> PlaceRecord:
    return PlaceRecord(name=name, **fields)


class FailingWritesRepository(InMemoryPlacesRepository):
    def __init__(self, records=None, *, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        super().__init__(records)

    def create(self, record):
        if self.fail_on is not None and record.name == self.fail_on:
            raise RepositoryError(f"cannot create {record.name}")
        return super().create(record)

    def update(self, record_id, changes):
        raise RepositoryError("updates rejected")


class UnidentifiedRepository(InMemoryPlacesRepository):
    def list_all(self):
        return [record.model_copy(update={"id": None}) for record in super().list_all()]


def test_end_to_end_merge_unions_sources_and_fills_url():
    repo = InMemoryPlacesRepository([make_place("Brihadeeshwarar Temple", sources=["Google Maps"])])
    resolver = MergeResolver(repo)

    result = resolver.resolve(
        make_place(
            "Brihadeeshwarar Temple",
            url="https://maps.app.goo.gl/x",
            sources=["Twitter"],
        ),
        MergeOptions(merge=True),
    )

    assert result.action is ResolveAction.MERGED
    assert result.message == "Merged with existing place (50% match)"
    assert result.record is not None
    assert set(result.record.sources) == {"Google Maps", "Twitter"}
    assert result.record.url == "https://maps.app.goo.gl/x"
    assert result.match is not None and result.match.record.id == "place-0001"
    assert len(repo) == 1


def test_merge_keeps_existing_url():
    repo = InMemoryPlacesRepository(
        [make_place("Shore Temple", url="https://maps.example/original", sources=["Manual"])]
    )

    result = MergeResolver(repo).resolve(
        make_place("Shore Temple", url="https://maps.example/other", sources=["Manual"])
    )

    assert result.action is ResolveAction.MERGED
    assert result.record.url == "https://maps.example/original"
    assert result.record.sources == ["Manual"]


def test_merge_fills_missing_location_without_touching_other_fields():
    existing = make_place("Hampi", category="Tourist Attraction", notes="keep me")
    repo = InMemoryPlacesRepository([existing])
    candidate = make_place(
        "Hampi",
        category="Temple",
        location=Location(lat=15.335, lon=76.46),
        notes="ignored",
        temple_types=["Divya Desam"],
    )

    result = MergeResolver(repo).resolve(candidate)

    assert result.record.category is PlaceCategory.TOURIST_ATTRACTION
    assert result.record.location == Location(lat=15.335, lon=76.46)
    assert result.record.notes == "keep me"
    assert result.record.temple_types == []


def test_merge_fills_missing_category():
    repo = InMemoryPlacesRepository([make_place("Kapaleeshwarar Temple")])

    result = MergeResolver(repo).resolve(make_place("Kapaleeshwarar Temple", category="Temple"))

    assert result.record.category is PlaceCategory.TEMPLE


def test_build_merge_update_touches_only_sources_when_existing_is_complete():
    existing = make_place(
        "Shore Temple",
        url="https://maps.example/s",
        category="Temple",
        location=Location(lat=12.6163, lon=80.1992),
        sources=["Manual"],
    )
    candidate = make_place("Shore Temple", url="https://maps.example/t", category="Museum", sources=["Twitter", "Manual"])

    update = build_merge_update(existing, candidate)

    assert update.changed_fields() == {"sources": ["Manual", "Twitter"]}


def test_force_creates_even_with_duplicates():
    repo = InMemoryPlacesRepository([make_place("Shore Temple")])

    result = MergeResolver(repo).resolve(make_place("Shore Temple"), MergeOptions(force=True))

    assert result.action is ResolveAction.CREATED
    assert result.message == "Created new place (forced)"
    assert result.record.id == "place-0002"
    assert len(repo) == 2


def test_creates_when_no_duplicates():
    repo = InMemoryPlacesRepository([make_place("Shore Temple")])

    result = MergeResolver(repo).resolve(make_place("Golden Temple Amritsar"))

    assert result.action is ResolveAction.CREATED
    assert result.message == "Created new place"
    assert result.matches == []


def test_skip_leaves_repository_untouched():
    repo = InMemoryPlacesRepository([make_place("Shore Temple", sources=["Manual"])])

    result = MergeResolver(repo).resolve(
        make_place("Shore Temple", sources=["Twitter"]),
        MergeOptions(skip=True),
    )

    assert result.action is ResolveAction.SKIPPED
    assert result.message == "Skipped - duplicate found (50% match)"
    assert result.match.record.id == "place-0001"
    assert repo.get("place-0001").sources == ["Manual"]


def test_without_merge_reports_all_duplicates():
    repo = InMemoryPlacesRepository([make_place("Shore Temple"), make_place("Shore Temple")])

    result = MergeResolver(repo).resolve(make_place("Shore Temple"), MergeOptions(merge=False))

    assert result.action is ResolveAction.DUPLICATE_FOUND
    assert result.message == "Found 2 potential duplicate(s)"
    assert result.record is None
    assert [match.record.id for match in result.matches] == ["place-0001", "place-0002"]
    assert len(repo) == 2


def test_update_failure_propagates():
    repo = FailingWritesRepository([make_place("Shore Temple")])

    with pytest.raises(RepositoryError, match="updates rejected"):
        MergeResolver(repo).resolve(make_place("Shore Temple", sources=["Twitter"]))


def test_in_memory_repository_returns_copies():
    repo = InMemoryPlacesRepository([make_place("Shore Temple", sources=["Manual"])])

    listed = repo.list_all()
    listed[0].sources.append("Tampered")

    assert repo.get("place-0001").sources == ["Manual"]
    updated = repo.update("place-0001", PlaceUpdate(city="Mahabalipuram"))
    assert updated.city == "Mahabalipuram"
    assert updated.id == "place-0001"


def test_batch_import_isolates_failures_and_groups_results():
    repo = FailingWritesRepository([make_place("Shore Temple")], fail_on="Broken Place")
    resolver = MergeResolver(repo)
    candidates = [
        make_place("Golden Temple Amritsar"),
        make_place("Broken Place"),
        make_place("Shore Temple"),
        make_place("Kailasa Temple Ellora"),
    ]

    result = batch_import_places(resolver, candidates, MergeOptions(skip=True))

    assert [outcome.record.name for outcome in result.created] == [
        "Golden Temple Amritsar",
        "Kailasa Temple Ellora",
    ]
    assert [outcome.match.record.name for outcome in result.skipped] == ["Shore Temple"]
    assert len(result.errors) == 1
    assert result.errors[0].record.name == "Broken Place"
    assert "cannot create Broken Place" in result.errors[0].error
    assert result.summary() == {"created": 2, "merged": 0, "skipped": 1, "duplicates": 0, "errors": 1}
    assert result.processed == 4


def test_batch_import_collects_duplicates_separately():
    repo = InMemoryPlacesRepository([make_place("Shore Temple")])

    result = batch_import_places(
        MergeResolver(repo),
        [make_place("Shore Temple")],
        MergeOptions(merge=False),
    )

    assert len(result.duplicates) == 1
    assert result.created == result.merged == result.skipped == []


def test_force_create_of_stored_copy_gets_fresh_id():
    repo = InMemoryPlacesRepository([make_place("Shore Temple", sources=["Manual"])])
    stored_copy = repo.list_all()[0]

    result = MergeResolver(repo).resolve(stored_copy, MergeOptions(force=True))

    ids = [record.id for record in repo.list_all()]
    assert ids == ["place-0001", "place-0002"]
    assert result.record.id == "place-0002"
    repo.update("place-0002", PlaceUpdate(city="Mahabalipuram"))
    assert repo.get("place-0001").city is None


def test_merge_into_unidentified_record_raises_repository_error():
    repo = UnidentifiedRepository([make_place("Shore Temple")])

    with pytest.raises(UnidentifiedRecordError, match="Shore Temple") as excinfo:
        MergeResolver(repo).resolve(make_place("Shore Temple", sources=["Twitter"]))

    assert isinstance(excinfo.value, RepositoryError)


def test_batch_import_tags_log_lines_with_batch_id():
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.record), level="DEBUG")
    try:
        result = batch_import_places(MergeResolver(InMemoryPlacesRepository()), [make_place("Hampi")])
    finally:
        logger.remove(handler_id)

    assert result.batch_id
    tagged = [record["message"] for record in captured if record["extra"].get("batch_id") == result.batch_id]
    assert "Created place" in tagged
    assert "Batch import finished" in tagged
