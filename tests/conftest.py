"""Shared pytest fixtures for placesync tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest

from placesync.config.settings import get_settings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep host configuration out of every test."""

    for key in list(os.environ):
        if key.startswith(("PLACESYNC_", "NOTION_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PLACESYNC_SETTINGS__PATHS__LOGS_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
