"""Plain-text list import.

Each non-empty line describes one place in any of these shapes::

    Temple Name
    Temple Name, City
    Temple Name - City, State
    https://www.google.com/maps/place/Temple+Name/@12.3,45.6,17z
    Temple Name https://maps.app.goo.gl/abc

Leading bullets (``-``, ``•``, ``*``) and numbering (``12.``) are removed.
Lines starting with ``#`` or ``//`` are comments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

from placesync.config.policies import EnrichmentPolicy
from placesync.entities.core import Location, PlaceCategory, PlaceRecord
from placesync.enrichment.maps import parse_maps_url, place_name_from_url
from placesync.errors import TextImportError
from placesync.utils.logging import get_logger


_LOGGER = get_logger(module=__name__)

_URL_RE = re.compile(r"https?://\S+")
_BULLET_RE = re.compile(r"^[-•*]\s*")
_NUMBERING_RE = re.compile(r"^\d+\.\s*")
_COMMENT_PREFIXES = ("#", "//")


@dataclass(frozen=True)
class TextEntry:
    name: str
    location: str | None = None
    url: str | None = None


def _clean_name(name: str) -> str:
    name = _BULLET_RE.sub("", name.strip()).strip()
    return _NUMBERING_RE.sub("", name).strip()


def parse_line(line: str) -> TextEntry | None:
    """Parse one line into a :class:`TextEntry`, or ``None`` when it names nothing."""

    url: str | None = None
    text = line.strip()
    match = _URL_RE.search(text)
    if match:
        url = match.group(0)
        text = _URL_RE.sub("", text, count=1).strip()

    if not text and url:
        text = place_name_from_url(url) or ""
    if not text:
        return None

    name, location = text, None
    if " - " in text:
        head, _, tail = text.partition(" - ")
        name, location = head.strip(), tail.strip()
    elif text.count(",") == 1:
        head, _, tail = text.partition(",")
        name, location = head.strip(), tail.strip()

    name = _clean_name(name)
    if not name:
        return None
    return TextEntry(name=name, location=location or None, url=url)


def parse_text(content: str) -> List[TextEntry]:
    """Parse every entry of a text list, skipping blanks and comments."""

    entries: List[TextEntry] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        entry = parse_line(line)
        if entry is None:
            _LOGGER.debug("Ignoring unparseable line", line=line)
            continue
        entries.append(entry)
    return entries


def load_text_file(path: str | Path) -> List[TextEntry]:
    """Read and parse a UTF-8 text list from disk."""

    target = Path(path)
    try:
        content = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TextImportError(f"Unable to read {target}: {exc}") from exc
    entries = parse_text(content)
    _LOGGER.info("Parsed text import", path=str(target), entries=len(entries))
    return entries


def entry_to_record(
    entry: TextEntry,
    origin: str,
    *,
    source: str | None = None,
    policy: EnrichmentPolicy | None = None,
) -> PlaceRecord:
    """Build the candidate record for one parsed entry.

    Coordinates are taken from the URL when it is a resolved Maps link. The
    free-text location hint is kept in the notes.
    """

    policy = policy or EnrichmentPolicy()
    notes = f"Imported from {origin}"
    if entry.location:
        notes = f"{notes}. Location: {entry.location}"

    location: Location | None = None
    info = parse_maps_url(entry.url)
    if info is not None and info.has_coordinates:
        location = Location(lat=info.lat, lon=info.lon, name=info.name or entry.name)

    return PlaceRecord(
        name=entry.name,
        category=PlaceCategory.OTHER,
        location=location,
        url=entry.url,
        sources=[source or policy.text_import_source],
        status=policy.default_status,
        notes=notes,
    )


__all__ = ["TextEntry", "parse_line", "parse_text", "load_text_file", "entry_to_record"]
