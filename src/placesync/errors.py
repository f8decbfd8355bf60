"""Exception hierarchy shared across placesync components."""

from __future__ import annotations


class PlaceSyncError(Exception):
    """Base exception for placesync failures."""


class ConfigurationError(PlaceSyncError):
    """Raised when required configuration is missing or invalid."""


class RepositoryError(PlaceSyncError):
    """Raised when the places store cannot be read or written."""


class RecordNotFoundError(RepositoryError):
    """Raised when an update targets an identifier the store does not hold."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Place not found: {record_id}")
        self.record_id = record_id


class NotionAPIError(RepositoryError):
    """Raised when the Notion API rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class UnidentifiedRecordError(RepositoryError):
    """Raised when a stored record is missing the identifier needed to write to it."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Stored place has no identifier: {name}")
        self.name = name


class TextImportError(PlaceSyncError):
    """Raised when a text import file cannot be read."""


__all__ = [
    "PlaceSyncError",
    "ConfigurationError",
    "RepositoryError",
    "RecordNotFoundError",
    "NotionAPIError",
    "UnidentifiedRecordError",
    "TextImportError",
]
