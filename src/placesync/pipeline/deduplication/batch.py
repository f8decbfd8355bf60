"""Sequential resolution of many candidates with per-place failure isolation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from placesync.entities.core import PlaceRecord
from placesync.utils.logging import get_logger, log_timing, logging_context, new_batch_id

from .merger import MergeOptions, MergeResolver, ResolveAction, ResolveResult


_LOGGER = get_logger(module=__name__)


@dataclass
class BatchImportError:
    record: PlaceRecord
    error: str


@dataclass
class BatchImportResult:
    """Resolve outcomes grouped by action, in input order."""

    batch_id: str = ""
    created: List[ResolveResult] = field(default_factory=list)
    merged: List[ResolveResult] = field(default_factory=list)
    skipped: List[ResolveResult] = field(default_factory=list)
    duplicates: List[ResolveResult] = field(default_factory=list)
    errors: List[BatchImportError] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return (
            len(self.created)
            + len(self.merged)
            + len(self.skipped)
            + len(self.duplicates)
            + len(self.errors)
        )

    def summary(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "merged": len(self.merged),
            "skipped": len(self.skipped),
            "duplicates": len(self.duplicates),
            "errors": len(self.errors),
        }


def batch_import_places(
    resolver: MergeResolver,
    candidates: Iterable[PlaceRecord],
    options: MergeOptions | None = None,
) -> BatchImportResult:
    """Resolve ``candidates`` one at a time in input order.

    A failure on one candidate is logged and recorded; the remaining
    candidates are still processed. Every log line of the run carries the
    generated ``batch_id``.
    """

    result = BatchImportResult(batch_id=new_batch_id())
    buckets = {
        ResolveAction.CREATED: result.created,
        ResolveAction.MERGED: result.merged,
        ResolveAction.SKIPPED: result.skipped,
        ResolveAction.DUPLICATE_FOUND: result.duplicates,
    }
    with logging_context(batch_id=result.batch_id), log_timing("batch_import", logger_=_LOGGER):
        for candidate in candidates:
            try:
                outcome = resolver.resolve(candidate, options)
            except Exception as exc:
                _LOGGER.exception("Failed to import place", name=candidate.name)
                result.errors.append(BatchImportError(record=candidate, error=str(exc)))
                continue
            buckets[outcome.action].append(outcome)
        _LOGGER.info("Batch import finished", **result.summary())
    return result


__all__ = ["BatchImportError", "BatchImportResult", "batch_import_places"]
