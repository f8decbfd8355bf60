"""Create, merge or skip decisions for incoming places."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from placesync.config.policies import DeduplicationPolicy
from placesync.entities.core import MatchResult, PlaceRecord, PlaceUpdate
from placesync.errors import UnidentifiedRecordError
from placesync.repositories.base import PlacesRepository
from placesync.utils.helpers import ordered_unique
from placesync.utils.logging import get_logger

from .matcher import DuplicateMatcher


_LOGGER = get_logger(module=__name__)


class ResolveAction(str, Enum):
    CREATED = "created"
    MERGED = "merged"
    SKIPPED = "skipped"
    DUPLICATE_FOUND = "duplicate_found"


@dataclass(frozen=True)
class MergeOptions:
    """How ``resolve`` reacts when duplicates exist.

    ``force`` bypasses matching entirely. Otherwise ``skip`` wins over
    ``merge``; with neither set the matches are reported without writing.
    """

    force: bool = False
    merge: bool = True
    skip: bool = False


@dataclass
class ResolveResult:
    """Outcome of resolving one candidate against the repository."""

    action: ResolveAction
    message: str
    record: PlaceRecord | None = None
    match: MatchResult | None = None
    matches: List[MatchResult] = field(default_factory=list)


def build_merge_update(existing: PlaceRecord, candidate: PlaceRecord) -> PlaceUpdate:
    """Return the changes that fold ``candidate`` into ``existing``.

    Sources are always unioned, existing order first. URL, location and
    category are taken from the candidate only when the existing record lacks
    them. No other field is touched.
    """

    update = PlaceUpdate(sources=ordered_unique([*existing.sources, *candidate.sources]))
    if candidate.url and not existing.url:
        update.url = candidate.url
    if candidate.location is not None and existing.location is None:
        update.location = candidate.location.model_copy()
    if candidate.category is not None and existing.category is None:
        update.category = candidate.category
    return update


class MergeResolver:
    """Decide whether a candidate becomes a new record or joins an existing one."""

    def __init__(
        self,
        repository: PlacesRepository,
        policy: DeduplicationPolicy | None = None,
        matcher: DuplicateMatcher | None = None,
    ) -> None:
        self.repository = repository
        self.policy = policy or DeduplicationPolicy()
        self.matcher = matcher or DuplicateMatcher(repository, self.policy)

    def _create(self, candidate: PlaceRecord, message: str) -> ResolveResult:
        created = self.repository.create(candidate)
        _LOGGER.info("Created place", record_id=created.id, name=created.name)
        return ResolveResult(action=ResolveAction.CREATED, record=created, message=message)

    def resolve(self, candidate: PlaceRecord, options: MergeOptions | None = None) -> ResolveResult:
        options = options or MergeOptions()
        if options.force:
            return self._create(candidate, "Created new place (forced)")

        matches = self.matcher.find_matches(candidate)
        if not matches:
            return self._create(candidate, "Created new place")

        best = matches[0]
        if options.skip:
            _LOGGER.info(
                "Skipped duplicate place",
                name=candidate.name,
                record_id=best.record.id,
                score=round(best.score, 2),
            )
            return ResolveResult(
                action=ResolveAction.SKIPPED,
                record=best.record,
                match=best,
                matches=matches,
                message=f"Skipped - duplicate found ({best.score:.0f}% match)",
            )

        if options.merge:
            if best.record.id is None:
                raise UnidentifiedRecordError(best.record.name)
            update = build_merge_update(best.record, candidate)
            merged = self.repository.update(best.record.id, update)
            _LOGGER.info(
                "Merged place into existing record",
                name=candidate.name,
                record_id=best.record.id,
                score=round(best.score, 2),
                fields=sorted(update.changed_fields()),
            )
            return ResolveResult(
                action=ResolveAction.MERGED,
                record=merged,
                match=best,
                matches=matches,
                message=f"Merged with existing place ({best.score:.0f}% match)",
            )

        _LOGGER.info("Found potential duplicates", name=candidate.name, count=len(matches))
        return ResolveResult(
            action=ResolveAction.DUPLICATE_FOUND,
            matches=matches,
            message=f"Found {len(matches)} potential duplicate(s)",
        )


__all__ = ["MergeOptions", "ResolveAction", "ResolveResult", "MergeResolver", "build_merge_update"]
