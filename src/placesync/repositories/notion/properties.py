"""Translation between Notion page property bags and place entities.

Property names used by the places database::

    Name         title
    Category     select
    Place        place      {lat, lon, name, address}
    URL          url
    Source       multi_select
    Temple Type  multi_select
    City         rich_text
    Country      rich_text
    Status       select

Notes are not a property; they are written as a paragraph block on creation
and never read back. Visits are appended as blocks below them. The deity is
derived on demand and not stored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from placesync.entities.core import Location, PlaceCategory, PlaceRecord, PlaceUpdate, VisitLog
from placesync.utils.logging import get_logger


_LOGGER = get_logger(module=__name__)

NAME = "Name"
CATEGORY = "Category"
PLACE = "Place"
URL = "URL"
SOURCE = "Source"
TEMPLE_TYPE = "Temple Type"
CITY = "City"
COUNTRY = "Country"
STATUS = "Status"


def _plain_text(items: Any) -> str | None:
    if not items:
        return None
    first = items[0] or {}
    text = first.get("plain_text")
    if text is None:
        text = (first.get("text") or {}).get("content")
    return text or None


def _select_name(prop: Mapping[str, Any] | None) -> str | None:
    if not prop:
        return None
    select = prop.get("select") or {}
    return select.get("name") or None


def _multi_select_names(prop: Mapping[str, Any] | None) -> List[str]:
    if not prop:
        return []
    return [option["name"] for option in prop.get("multi_select") or [] if option.get("name")]


def _parse_category(label: str | None, page_id: str | None) -> PlaceCategory | None:
    if not label:
        return None
    try:
        return PlaceCategory.parse(label)
    except ValueError:
        _LOGGER.warning("Unknown category on page, using Other", page_id=page_id, category=label)
        return PlaceCategory.OTHER


def _parse_location(prop: Mapping[str, Any] | None) -> Location | None:
    if not prop:
        return None
    place = prop.get("place") or {}
    lat, lon = place.get("lat"), place.get("lon")
    if lat is None or lon is None:
        return None
    return Location(lat=lat, lon=lon, name=place.get("name"), address=place.get("address"))


def page_to_record(page: Mapping[str, Any]) -> PlaceRecord:
    """Build a :class:`PlaceRecord` from a Notion page object.

    Raises ``ValueError`` when the page has no title.
    """

    page_id = page.get("id")
    props: Mapping[str, Any] = page.get("properties") or {}
    name = _plain_text((props.get(NAME) or {}).get("title"))
    if not name or not name.strip():
        raise ValueError(f"Notion page {page_id} has no title")
    payload: Dict[str, Any] = {
        "id": page_id,
        "name": name,
        "category": _parse_category(_select_name(props.get(CATEGORY)), page_id),
        "location": _parse_location(props.get(PLACE)),
        "url": (props.get(URL) or {}).get("url"),
        "sources": _multi_select_names(props.get(SOURCE)),
        "temple_types": _multi_select_names(props.get(TEMPLE_TYPE)),
        "city": _plain_text((props.get(CITY) or {}).get("rich_text")),
        "country": _plain_text((props.get(COUNTRY) or {}).get("rich_text")),
    }
    status = _select_name(props.get(STATUS))
    if status:
        payload["status"] = status
    return PlaceRecord.model_validate(payload)


def _title(value: str) -> Dict[str, Any]:
    return {"title": [{"text": {"content": value}}]}


def _rich_text(value: str) -> Dict[str, Any]:
    return {"rich_text": [{"text": {"content": value}}]}


def _select(value: str) -> Dict[str, Any]:
    return {"select": {"name": value}}


def _multi_select(values: List[str]) -> Dict[str, Any]:
    return {"multi_select": [{"name": value} for value in values]}


def _place(location: Location, fallback_name: str | None) -> Dict[str, Any]:
    return {
        "type": "place",
        "place": {
            "lat": location.lat,
            "lon": location.lon,
            "name": location.name or fallback_name,
            "address": location.address or "",
        },
    }


def _properties(
    *,
    name: str | None,
    category: PlaceCategory | None,
    location: Location | None,
    url: str | None,
    sources: List[str] | None,
    temple_types: List[str] | None,
    city: str | None,
    country: str | None,
    status: str | None,
    fallback_name: str | None,
) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    if name:
        properties[NAME] = _title(name)
    if status:
        properties[STATUS] = _select(status)
    if category is not None:
        properties[CATEGORY] = _select(category.value)
    if location is not None:
        properties[PLACE] = _place(location, fallback_name)
    if url:
        properties[URL] = {"url": url}
    if sources:
        properties[SOURCE] = _multi_select(sources)
    if temple_types:
        properties[TEMPLE_TYPE] = _multi_select(temple_types)
    if city:
        properties[CITY] = _rich_text(city)
    if country:
        properties[COUNTRY] = _rich_text(country)
    return properties


def record_to_properties(record: PlaceRecord) -> Dict[str, Any]:
    """Return the property bag for creating a page from ``record``."""

    return _properties(
        name=record.name,
        category=record.category,
        location=record.location,
        url=record.url,
        sources=record.sources,
        temple_types=record.temple_types,
        city=record.city,
        country=record.country,
        status=record.status,
        fallback_name=record.name,
    )


def update_to_properties(update: PlaceUpdate) -> Dict[str, Any]:
    """Return the property bag holding only the fields set on ``update``."""

    return _properties(
        name=update.name,
        category=update.category,
        location=update.location,
        url=update.url,
        sources=update.sources,
        temple_types=update.temple_types,
        city=update.city,
        country=update.country,
        status=update.status,
        fallback_name=update.name,
    )


def _paragraph(text: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": [{"text": {"content": text}}]},
    }


def notes_blocks(notes: str | None) -> List[Dict[str, Any]]:
    """Return the child blocks that carry free-form notes on a new page."""

    if not notes:
        return []
    return [_paragraph(notes)]


def visit_blocks(visit: VisitLog) -> List[Dict[str, Any]]:
    """Return the blocks appended to a page for one visit.

    Optional cost and notes paragraphs follow a ``Visit - YYYY-MM-DD`` heading,
    then one external image block per photo.
    """

    blocks: List[Dict[str, Any]] = [
        {
            "object": "block",
            "type": "heading_3",
            "heading_3": {"rich_text": [{"text": {"content": f"Visit - {visit.visited_on.isoformat()}"}}]},
        }
    ]
    if visit.cost:
        blocks.append(_paragraph(f"Cost: {visit.cost}"))
    if visit.notes:
        blocks.append(_paragraph(visit.notes))
    for photo in visit.photos:
        blocks.append(
            {
                "object": "block",
                "type": "image",
                "image": {"type": "external", "external": {"url": photo}},
            }
        )
    return blocks


__all__ = [
    "page_to_record",
    "record_to_properties",
    "update_to_properties",
    "notes_blocks",
    "visit_blocks",
]
