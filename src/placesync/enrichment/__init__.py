"""Deterministic metadata enrichment for place records."""

from .address import (
    AddressComponents,
    extract_city,
    extract_country,
    extract_state,
    parse_address,
)
from .maps import MapsUrlInfo, parse_maps_url, place_name_from_url
from .record import enrich_record
from .temples import classify, enhance_temple_metadata, get_deity

__all__ = [
    "AddressComponents",
    "extract_city",
    "extract_state",
    "extract_country",
    "parse_address",
    "MapsUrlInfo",
    "parse_maps_url",
    "place_name_from_url",
    "classify",
    "get_deity",
    "enhance_temple_metadata",
    "enrich_record",
]
