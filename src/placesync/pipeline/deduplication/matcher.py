"""Score stored places against a candidate to find likely duplicates."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from placesync.config.policies import DeduplicationPolicy
from placesync.entities.core import MatchResult, PlaceRecord
from placesync.repositories.base import PlacesRepository
from placesync.utils.logging import get_logger
from placesync.utils.similarity import geo_distance_km, text_similarity


_LOGGER = get_logger(module=__name__)


class DuplicateMatcher:
    """Rank existing records by how likely they describe the candidate place.

    Each existing record is scored independently from four signals: name
    similarity, exact URL equality, coordinate proximity and address
    similarity. Weights and thresholds come from :class:`DeduplicationPolicy`.
    """

    def __init__(self, repository: PlacesRepository, policy: DeduplicationPolicy | None = None) -> None:
        self.repository = repository
        self.policy = policy or DeduplicationPolicy()

    def score_pair(self, candidate: PlaceRecord, existing: PlaceRecord) -> Tuple[float, List[str]]:
        """Return the capped score and the reasons that contributed to it."""

        policy = self.policy
        score = 0.0
        reasons: List[str] = []

        name_similarity = text_similarity(candidate.name, existing.name)
        if name_similarity > policy.name_similarity_threshold:
            score += name_similarity * policy.name_weight
            reasons.append(f"Name similarity: {name_similarity * 100:.0f}%")

        if candidate.url and existing.url and candidate.url == existing.url:
            score += policy.url_match_score
            reasons.append("Exact URL match")

        if candidate.location is not None and existing.location is not None:
            distance = geo_distance_km(
                candidate.location.lat,
                candidate.location.lon,
                existing.location.lat,
                existing.location.lon,
            )
            if distance < policy.same_location_km:
                score += policy.same_location_score
                reasons.append(f"Same location ({distance * 1000:.0f}m apart)")
            elif distance < policy.nearby_km:
                score += policy.nearby_score
                reasons.append(f"Nearby ({distance:.1f}km apart)")

        if candidate.address and existing.address:
            address_similarity = text_similarity(candidate.address, existing.address)
            if address_similarity > policy.address_similarity_threshold:
                score += address_similarity * policy.address_weight
                reasons.append(f"Address similarity: {address_similarity * 100:.0f}%")

        return min(score, policy.max_score), reasons

    def score_records(self, candidate: PlaceRecord, records: Sequence[PlaceRecord]) -> List[MatchResult]:
        """Score a snapshot of records, best first.

        Only records reaching ``match_threshold`` are returned. Ties keep the
        order in which ``records`` enumerates them.
        """

        matches: List[MatchResult] = []
        for existing in records:
            score, reasons = self.score_pair(candidate, existing)
            if score < self.policy.match_threshold:
                continue
            _LOGGER.debug(
                "Scored potential duplicate",
                candidate=candidate.name,
                record_id=existing.id,
                score=round(score, 2),
                reasons=reasons,
            )
            matches.append(MatchResult(record=existing, score=score, reasons=reasons))
        matches.sort(key=lambda match: match.score, reverse=True)
        return matches

    def find_matches(self, candidate: PlaceRecord) -> List[MatchResult]:
        """Read the repository once and return ranked duplicate candidates."""

        records = self.repository.list_all()
        return self.score_records(candidate, records)


__all__ = ["DuplicateMatcher"]
