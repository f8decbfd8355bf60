"""Enrichment and import defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EnrichmentPolicy(BaseModel):
    """Defaults applied to records created from automated sources."""

    default_status: str = Field(default="Want to go", min_length=1)
    text_import_source: str = Field(default="Text Import", min_length=1)
    manual_source: str = Field(default="Manual", min_length=1)
    classify_temples_on_add: bool = Field(
        default=True,
        description="Attach temple classification tags to Temple records before resolving.",
    )
    derive_city_country: bool = Field(
        default=True,
        description="Derive city and country from the location address when missing.",
    )
