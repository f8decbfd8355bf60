"""Configuration utilities for placesync."""

from .policies import DeduplicationPolicy, EnrichmentPolicy, Policies, load_policies
from .settings import NotionSettings, Settings, get_settings

__all__ = [
    "Settings",
    "NotionSettings",
    "get_settings",
    "Policies",
    "load_policies",
    "DeduplicationPolicy",
    "EnrichmentPolicy",
]
