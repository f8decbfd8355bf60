"""Duplicate detection and merge resolution for places."""

from .batch import BatchImportError, BatchImportResult, batch_import_places
from .matcher import DuplicateMatcher
from .merger import MergeOptions, MergeResolver, ResolveAction, ResolveResult, build_merge_update

__all__ = [
    "DuplicateMatcher",
    "MergeResolver",
    "MergeOptions",
    "ResolveAction",
    "ResolveResult",
    "build_merge_update",
    "batch_import_places",
    "BatchImportResult",
    "BatchImportError",
]
