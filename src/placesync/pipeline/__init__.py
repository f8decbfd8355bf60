"""Place processing pipelines."""

from .backfill import BackfillReport, backfill_city_country, classify_temples
from .deduplication import (
    BatchImportResult,
    DuplicateMatcher,
    MergeOptions,
    MergeResolver,
    ResolveAction,
    ResolveResult,
    batch_import_places,
)
from .listing import filter_places, lookup_places
from .stats import PlaceStats, compute_place_stats

__all__ = [
    "DuplicateMatcher",
    "MergeResolver",
    "MergeOptions",
    "ResolveAction",
    "ResolveResult",
    "batch_import_places",
    "BatchImportResult",
    "BackfillReport",
    "backfill_city_country",
    "classify_temples",
    "PlaceStats",
    "compute_place_stats",
    "filter_places",
    "lookup_places",
]
