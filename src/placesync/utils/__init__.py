"""Utility helpers shared across placesync modules."""

from .helpers import clean_optional_text, normalize_whitespace, ordered_unique
from .logging import configure_logging, get_logger, log_timing, logging_context, new_batch_id
from .similarity import EARTH_RADIUS_KM, geo_distance_km, text_similarity

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "new_batch_id",
    "log_timing",
    "normalize_whitespace",
    "ordered_unique",
    "clean_optional_text",
    "EARTH_RADIUS_KM",
    "text_similarity",
    "geo_distance_km",
]
