"""Top-level package for the placesync places aggregator."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("placesync")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import Location, MatchResult, PlaceCategory, PlaceRecord, PlaceStatus, PlaceUpdate

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "PlaceCategory",
    "PlaceStatus",
    "Location",
    "PlaceRecord",
    "PlaceUpdate",
    "MatchResult",
]
