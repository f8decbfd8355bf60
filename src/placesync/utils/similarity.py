"""String and geographic similarity helpers used by duplicate matching."""

from __future__ import annotations

import math
from functools import lru_cache

import jellyfish

from .logging import get_logger


_LOGGER = get_logger(module=__name__)

EARTH_RADIUS_KM = 6371.0
_SIMILARITY_CACHE_SIZE = 4096


def _normalize(text: str | None) -> str:
    if not text:
        return ""
    return text.strip().lower()


@lru_cache(maxsize=_SIMILARITY_CACHE_SIZE)
def _levenshtein_ratio(text1: str, text2: str) -> float:
    """Return ``1 - distance / longest`` for two already-normalized strings."""

    distance = jellyfish.levenshtein_distance(text1, text2)
    return 1.0 - distance / max(len(text1), len(text2))


def text_similarity(text1: str | None, text2: str | None) -> float:
    """Compute the normalized edit-distance similarity of two strings.

    Both inputs are trimmed and lowercased. Missing or blank input scores 0.0 and
    equal strings score exactly 1.0.
    """

    normalized_1 = _normalize(text1)
    normalized_2 = _normalize(text2)
    if not normalized_1 or not normalized_2:
        return 0.0
    if normalized_1 == normalized_2:
        return 1.0

    # Ordered key keeps the cache symmetric.
    if normalized_2 < normalized_1:
        normalized_1, normalized_2 = normalized_2, normalized_1
    score = _levenshtein_ratio(normalized_1, normalized_2)
    _LOGGER.debug(
        "Computed text similarity",
        score=score,
        length_a=len(normalized_1),
        length_b=len(normalized_2),
    )
    return score


def geo_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points in kilometers.

    Uses the haversine formula on a sphere of radius 6371 km.
    """

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


__all__ = ["EARTH_RADIUS_KM", "text_similarity", "geo_distance_km"]
