"""Core domain entities shared by matching, enrichment and repositories."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

from placesync.utils.helpers import clean_optional_text, ordered_unique


class PlaceCategory(str, Enum):
    """Category labels used by the places database."""

    RESTAURANT = "Restaurant"
    CAFE = "Cafe"
    BAR = "Bar"
    TEMPLE = "Temple"
    MUSEUM = "Museum"
    PARK = "Park"
    HOTEL = "Hotel"
    SHOP = "Shop"
    TOURIST_ATTRACTION = "Tourist Attraction"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> "PlaceCategory":
        """Resolve a label case-insensitively, raising ``ValueError`` when unknown."""

        cleaned = value.strip().lower()
        for member in cls:
            if member.value.lower() == cleaned:
                return member
        raise ValueError(f"Unknown place category: {value!r}")


class PlaceStatus(str, Enum):
    """Lifecycle labels for a place."""

    WANT_TO_GO = "Want to go"
    VISITED = "Visited"
    MAYBE = "Maybe"

    @classmethod
    def parse(cls, value: str) -> "PlaceStatus":
        """Resolve a status label case-insensitively, raising ``ValueError`` when unknown."""

        cleaned = value.strip().lower()
        for member in cls:
            if member.value.lower() == cleaned:
                return member
        raise ValueError(f"Unknown place status: {value!r}")


def _clean_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    cleaned = [str(item).strip() for item in value]
    return ordered_unique(item for item in cleaned if item)


def _coerce_category(value: Any) -> Any:
    if value is None or isinstance(value, PlaceCategory):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        return PlaceCategory.parse(value)
    return value


class Location(BaseModel):
    """Geographic position of a place; both coordinates are always present."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    name: str | None = Field(default=None)
    address: str | None = Field(default=None)

    @field_validator("name", "address")
    @classmethod
    def _clean_text(cls, value: str | None) -> str | None:
        return clean_optional_text(value)


class PlaceRecord(BaseModel):
    """Canonical place entity independent of any storage backend."""

    id: str | None = Field(
        default=None,
        description="Identifier assigned by the repository on creation.",
    )
    name: str = Field(..., min_length=1)
    category: PlaceCategory | None = Field(default=None)
    location: Location | None = Field(default=None)
    url: str | None = Field(default=None)
    sources: List[str] = Field(
        default_factory=list,
        description="Provenance tags; duplicates are collapsed keeping first-seen order.",
    )
    temple_types: List[str] = Field(
        default_factory=list,
        description="Temple classification tags, only kept for Temple records.",
    )
    deity: str | None = Field(default=None)
    city: str | None = Field(default=None)
    country: str | None = Field(default=None)
    status: str = Field(default=PlaceStatus.WANT_TO_GO.value, min_length=1)
    notes: str | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name must contain non-whitespace characters")
        return cleaned

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Any:
        return _coerce_category(value)

    @field_validator("sources", "temple_types", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> List[str]:
        return _clean_tags(value)

    @field_validator("url", "deity", "city", "country", "notes")
    @classmethod
    def _clean_text(cls, value: str | None) -> str | None:
        return clean_optional_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status_value(cls, value: Any) -> Any:
        if isinstance(value, PlaceStatus):
            return value.value
        if value is None:
            return PlaceStatus.WANT_TO_GO.value
        return value

    @model_validator(mode="after")
    def _temple_types_only_for_temples(self) -> "PlaceRecord":
        if self.category is not PlaceCategory.TEMPLE and self.temple_types:
            self.temple_types = []
        return self

    @property
    def address(self) -> str | None:
        return self.location.address if self.location else None

    def apply(self, changes: "PlaceUpdate") -> "PlaceRecord":
        """Return a validated copy with the non-empty fields of ``changes`` applied."""

        payload = self.model_dump()
        payload.update(changes.changed_fields())
        return PlaceRecord.model_validate(payload)


class PlaceUpdate(BaseModel):
    """Partial record describing the fields to change on an existing place."""

    name: str | None = Field(default=None)
    category: PlaceCategory | None = Field(default=None)
    location: Location | None = Field(default=None)
    url: str | None = Field(default=None)
    sources: List[str] | None = Field(default=None)
    temple_types: List[str] | None = Field(default=None)
    deity: str | None = Field(default=None)
    city: str | None = Field(default=None)
    country: str | None = Field(default=None)
    status: str | None = Field(default=None)
    notes: str | None = Field(default=None)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Any:
        return _coerce_category(value)

    @field_validator("sources", "temple_types", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> List[str] | None:
        if value is None:
            return None
        return _clean_tags(value)

    def changed_fields(self) -> Dict[str, Any]:
        """Return the populated fields, keeping nested models as dictionaries."""

        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.changed_fields()


class MatchResult(BaseModel):
    """Existing record that scored above the duplicate threshold for a candidate."""

    record: PlaceRecord
    score: float = Field(..., ge=0.0, le=100.0)
    reasons: List[str] = Field(default_factory=list)

    @property
    def candidate_record_id(self) -> str | None:
        return self.record.id


class VisitLog(BaseModel):
    """One visit appended to a place's page."""

    visited_on: date = Field(default_factory=date.today)
    cost: str | None = Field(default=None)
    notes: str | None = Field(default=None)
    photos: List[str] = Field(default_factory=list, description="External image URLs.")

    @field_validator("cost", "notes")
    @classmethod
    def _clean_text(cls, value: str | None) -> str | None:
        return clean_optional_text(value)

    @field_validator("photos", mode="before")
    @classmethod
    def _clean_photos(cls, value: Any) -> List[str]:
        return _clean_tags(value)


__all__ = [
    "PlaceCategory",
    "PlaceStatus",
    "Location",
    "PlaceRecord",
    "PlaceUpdate",
    "MatchResult",
    "VisitLog",
]
