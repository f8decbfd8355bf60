"""Offline parsing of resolved Google Maps URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote_plus

_COORDINATES_RE = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")
_PLACE_SEGMENT_RE = re.compile(r"/place/([^/@?]+)")


@dataclass(frozen=True)
class MapsUrlInfo:
    """Details recoverable from a Maps URL without calling any API."""

    url: str
    lat: float | None = None
    lon: float | None = None
    name: str | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


def place_name_from_url(url: str | None) -> str | None:
    """Return the decoded ``/place/<name>`` segment of a Maps URL."""

    if not url:
        return None
    match = _PLACE_SEGMENT_RE.search(url)
    if not match:
        return None
    name = unquote_plus(match.group(1)).strip()
    return name or None


def parse_maps_url(url: str | None) -> MapsUrlInfo | None:
    """Extract coordinates and place name from an already-resolved Maps URL.

    Short links (``maps.app.goo.gl``) must be expanded by the caller first.
    Returns ``None`` when the URL carries neither coordinates nor a place name.
    """

    if not url:
        return None
    name = place_name_from_url(url)
    match = _COORDINATES_RE.search(url)
    if match:
        lat, lon = float(match.group(1)), float(match.group(2))
        if -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0:
            return MapsUrlInfo(url=url, lat=lat, lon=lon, name=name)
    if name is None:
        return None
    return MapsUrlInfo(url=url, name=name)


__all__ = ["MapsUrlInfo", "parse_maps_url", "place_name_from_url"]
