"""Notion-backed places storage."""

from .client import NotionClient
from .properties import (
    notes_blocks,
    page_to_record,
    record_to_properties,
    update_to_properties,
    visit_blocks,
)
from .repository import NotionPlacesRepository

__all__ = [
    "NotionClient",
    "NotionPlacesRepository",
    "page_to_record",
    "record_to_properties",
    "update_to_properties",
    "notes_blocks",
    "visit_blocks",
]
