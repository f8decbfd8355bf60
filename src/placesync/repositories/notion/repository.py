"""Places repository backed by a Notion database."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List

from placesync.config.settings import Settings
from placesync.entities.core import PlaceRecord, PlaceStatus, PlaceUpdate, VisitLog
from placesync.errors import ConfigurationError, NotionAPIError, RecordNotFoundError
from placesync.utils.logging import get_logger

from .client import NotionClient
from .properties import notes_blocks, page_to_record, record_to_properties, update_to_properties, visit_blocks


_LOGGER = get_logger(module=__name__)


@contextmanager
def _page_errors(page_id: str) -> Iterator[None]:
    try:
        yield
    except NotionAPIError as exc:
        if exc.status_code == 404:
            raise RecordNotFoundError(page_id) from exc
        raise


class NotionPlacesRepository:
    """Read and write places through :class:`NotionClient`.

    Pages without a title cannot become records; they are logged and left out
    of ``list_all``.
    """

    def __init__(self, client: NotionClient, database_id: str) -> None:
        self.client = client
        self.database_id = database_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotionPlacesRepository":
        notion = settings.notion
        if not notion.api_key:
            raise ConfigurationError(
                "Notion API key is not configured; set NOTION_API_KEY or notion.api_key"
            )
        if not notion.database_id:
            raise ConfigurationError(
                "Notion database id is not configured; set NOTION_DATABASE_ID or notion.database_id"
            )
        client = NotionClient(
            notion.api_key,
            api_version=notion.api_version,
            base_url=notion.base_url,
            timeout_seconds=notion.timeout_seconds,
            request_interval_seconds=notion.request_interval_seconds,
        )
        return cls(client, notion.database_id)

    def check_connection(self) -> str:
        """Return the database title, raising :class:`NotionAPIError` on failure."""

        database = self.client.retrieve_database(self.database_id)
        title = database.get("title") or []
        if title and title[0].get("plain_text"):
            return title[0]["plain_text"]
        return "Untitled"

    def list_all(self) -> List[PlaceRecord]:
        records: List[PlaceRecord] = []
        for page in self.client.query_database(self.database_id):
            try:
                records.append(page_to_record(page))
            except ValueError as exc:
                _LOGGER.warning("Skipping unreadable page", page_id=page.get("id"), error=str(exc))
        return records

    def create(self, record: PlaceRecord) -> PlaceRecord:
        page = self.client.create_page(
            self.database_id,
            record_to_properties(record),
            children=notes_blocks(record.notes),
        )
        _LOGGER.info("Created Notion page", page_id=page.get("id"), name=record.name)
        return record.model_copy(update={"id": page.get("id")})

    def update(self, record_id: str, changes: PlaceUpdate) -> PlaceRecord:
        with _page_errors(record_id):
            page = self.client.update_page(record_id, update_to_properties(changes))
        _LOGGER.info("Updated Notion page", page_id=record_id, fields=sorted(changes.changed_fields()))
        return page_to_record(page)

    def append_visit(self, record_id: str, visit: VisitLog) -> PlaceRecord:
        """Append the visit blocks to the page, then set its status to Visited."""

        with _page_errors(record_id):
            self.client.append_block_children(record_id, visit_blocks(visit))
        _LOGGER.info("Appended visit", page_id=record_id, visited_on=visit.visited_on.isoformat())
        return self.update(record_id, PlaceUpdate(status=PlaceStatus.VISITED.value))


__all__ = ["NotionPlacesRepository"]
