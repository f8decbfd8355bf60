"""Duplicate matching policy models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class DeduplicationPolicy(BaseModel):
    """Scoring weights and thresholds used when matching places.

    Scores are expressed on a 0-100 scale. Name and address contributions are
    proportional to their similarity; URL and location contributions are flat.
    """

    match_threshold: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="Minimum combined score for an existing record to count as a match.",
    )
    max_score: float = Field(default=100.0, gt=0.0, le=100.0)
    name_similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Name similarity must exceed this value to contribute.",
    )
    name_weight: float = Field(default=50.0, ge=0.0)
    url_match_score: float = Field(default=40.0, ge=0.0)
    same_location_km: float = Field(
        default=0.1,
        gt=0.0,
        description="Distance below which two places are considered the same spot.",
    )
    same_location_score: float = Field(default=30.0, ge=0.0)
    nearby_km: float = Field(
        default=1.0,
        gt=0.0,
        description="Distance below which two places are considered nearby.",
    )
    nearby_score: float = Field(default=15.0, ge=0.0)
    address_similarity_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    address_weight: float = Field(default=20.0, ge=0.0)

    @model_validator(mode="after")
    def _validate_radii(self) -> "DeduplicationPolicy":
        if self.nearby_km < self.same_location_km:
            raise ValueError("nearby_km must be greater than or equal to same_location_km")
        return self
