"""Domain entities for placesync."""

from .core import (
    Location,
    MatchResult,
    PlaceCategory,
    PlaceRecord,
    PlaceStatus,
    PlaceUpdate,
    VisitLog,
)

__all__ = [
    "PlaceCategory",
    "PlaceStatus",
    "Location",
    "PlaceRecord",
    "PlaceUpdate",
    "MatchResult",
    "VisitLog",
]
