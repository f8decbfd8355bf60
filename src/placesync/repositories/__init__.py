"""Places storage backends."""

from placesync.errors import NotionAPIError, RecordNotFoundError, RepositoryError

from .base import PlacesRepository
from .memory import InMemoryPlacesRepository
from .notion import NotionClient, NotionPlacesRepository

__all__ = [
    "PlacesRepository",
    "InMemoryPlacesRepository",
    "NotionClient",
    "NotionPlacesRepository",
    "RepositoryError",
    "RecordNotFoundError",
    "NotionAPIError",
]
