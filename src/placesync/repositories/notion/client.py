"""Minimal Notion REST client for the places database."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Mapping

import requests
from requests import Response
from requests.exceptions import RequestException

from placesync.errors import NotionAPIError
from placesync.utils.logging import get_logger


class NotionClient:
    """Issue authenticated JSON requests against the Notion API.

    Requests are spaced at least ``request_interval_seconds`` apart to stay
    under the API rate limit. Failures are raised as :class:`NotionAPIError`
    and never retried.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_version: str = "2022-06-28",
        base_url: str = "https://api.notion.com/v1",
        timeout_seconds: float = 30.0,
        request_interval_seconds: float = 0.0,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.request_interval_seconds = request_interval_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": api_version,
                "Content-Type": "application/json",
            }
        )
        self._clock = clock
        self._sleep = sleep
        self._last_request_at: float | None = None
        self._logger = get_logger(component="notion_client")

    def _wait_for_slot(self) -> None:
        if self.request_interval_seconds <= 0 or self._last_request_at is None:
            return
        elapsed = self._clock() - self._last_request_at
        remaining = self.request_interval_seconds - elapsed
        if remaining > 0:
            self._sleep(remaining)

    @staticmethod
    def _error_from_response(method: str, path: str, response: Response) -> NotionAPIError:
        code: str | None = None
        message = response.text
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, Mapping):
            code = body.get("code")
            message = body.get("message") or message
        return NotionAPIError(
            f"{method} {path} failed with status {response.status_code}: {message}",
            status_code=response.status_code,
            code=code,
        )

    def request(self, method: str, path: str, payload: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        """Send one request and return the decoded JSON body."""

        url = f"{self.base_url}/{path.lstrip('/')}"
        self._wait_for_slot()
        try:
            response = self._session.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                timeout=self.timeout_seconds,
            )
        except RequestException as exc:
            raise NotionAPIError(f"{method} {path} failed: {exc}") from exc
        finally:
            self._last_request_at = self._clock()

        if not 200 <= response.status_code < 300:
            error = self._error_from_response(method, path, response)
            self._logger.warning(
                "Notion request failed",
                method=method,
                path=path,
                status=response.status_code,
                code=error.code,
            )
            raise error
        try:
            return response.json()
        except ValueError as exc:
            raise NotionAPIError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

    def retrieve_database(self, database_id: str) -> Dict[str, Any]:
        return self.request("GET", f"databases/{database_id}")

    def query_database(self, database_id: str, *, filter: Mapping[str, Any] | None = None) -> List[Dict[str, Any]]:
        """Return every page of the database, following pagination cursors."""

        pages: List[Dict[str, Any]] = []
        cursor: str | None = None
        while True:
            payload: Dict[str, Any] = {}
            if cursor:
                payload["start_cursor"] = cursor
            if filter:
                payload["filter"] = dict(filter)
            body = self.request("POST", f"databases/{database_id}/query", payload)
            pages.extend(body.get("results") or [])
            cursor = body.get("next_cursor")
            if not body.get("has_more") or not cursor:
                break
        self._logger.debug("Queried database", database_id=database_id, pages=len(pages))
        return pages

    def create_page(
        self,
        database_id: str,
        properties: Mapping[str, Any],
        children: List[Mapping[str, Any]] | None = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "parent": {"database_id": database_id},
            "properties": dict(properties),
        }
        if children:
            payload["children"] = list(children)
        return self.request("POST", "pages", payload)

    def update_page(self, page_id: str, properties: Mapping[str, Any]) -> Dict[str, Any]:
        return self.request("PATCH", f"pages/{page_id}", {"properties": dict(properties)})

    def append_block_children(self, block_id: str, children: List[Mapping[str, Any]]) -> Dict[str, Any]:
        return self.request("PATCH", f"blocks/{block_id}/children", {"children": list(children)})


__all__ = ["NotionClient"]
