"""Shared helpers used across the placesync CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, MutableMapping

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from placesync.config.settings import Settings
from placesync.entities.core import MatchResult
from placesync.errors import ConfigurationError
from placesync.repositories.notion import NotionPlacesRepository
from placesync.utils.logging import get_logger

console = Console()
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    verbose: bool


def _merge_dict(dest: MutableMapping[str, Any], src: Mapping[str, Any]) -> None:
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(dest.get(key), MutableMapping):
            _merge_dict(dest[key], value)  # type: ignore[index]
        elif isinstance(value, Mapping):
            dest[key] = dict(value)
        else:
            dest[key] = value


def parse_override(argument: str) -> Dict[str, Any]:
    """Parse dotted ``key=value`` overrides into nested dictionaries."""

    if "=" not in argument:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    dotted, value = argument.split("=", 1)
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not segments:
        raise typer.BadParameter("Override keys must not be empty")
    cursor: Dict[str, Any] = {}
    current = cursor
    for segment in segments[:-1]:
        nested: Dict[str, Any] = {}
        current[segment] = nested
        current = nested
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    current[segments[-1]] = parsed_value
    return cursor


def merge_overrides(overrides: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge override dictionaries using deep semantics."""

    result: Dict[str, Any] = {}
    for override in overrides:
        _merge_dict(result, override)
    return result


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    try:
        return Settings(**payload)
    except ValidationError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    verbose: bool,
) -> CLIState:
    """Populate ``ctx.obj`` with :class:`CLIState`."""

    merged = merge_overrides(overrides)
    settings = resolve_settings(environment, merged)
    state = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        verbose=verbose,
    )
    ctx.obj = state
    return state


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`.

    Commands must call this helper to access shared state; when the callback has
    not run an informative error is raised.
    """

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    if not isinstance(ctx.obj, CLIState):  # pragma: no cover
        raise CLIError("Unexpected CLI context payload")
    return ctx.obj


def open_repository(state: CLIState) -> NotionPlacesRepository:
    """Build the Notion-backed repository, reporting missing credentials."""

    try:
        return NotionPlacesRepository.from_settings(state.settings)
    except ConfigurationError as exc:
        raise CLIError(str(exc)) from exc


def resolve_path(path: str | Path, *, must_exist: bool = True) -> Path:
    """Resolve a filesystem path, optionally requiring that it exists."""

    target = Path(path).expanduser().resolve()
    if must_exist and not target.exists():
        raise CLIError(f"Path does not exist: {target}")
    return target


def _heading(title: str) -> None:
    console.print(f"[bold]{title}[/bold]")


def render_summary(title: str, rows: Mapping[str, Any]) -> None:
    """Print a heading followed by a borderless label/value table."""

    _heading(title)
    table = Table(show_header=False, box=None)
    for label, value in rows.items():
        table.add_row(label, str(value))
    console.print(table)


def render_matches(title: str, matches: Iterable[MatchResult]) -> None:
    """Print ranked duplicate matches as a Rich table."""

    _heading(title)
    table = Table(box=None)
    table.add_column("Score", justify="right")
    table.add_column("Name")
    table.add_column("ID")
    table.add_column("Reasons")
    for match in matches:
        table.add_row(
            f"{match.score:.0f}%",
            match.record.name,
            match.record.id or "-",
            "; ".join(match.reasons),
        )
    console.print(table)


def render_counts(title: str, counts: Mapping[str, int]) -> None:
    """Print a two-column table of counts sorted by frequency."""

    _heading(title)
    table = Table(box=None)
    table.add_column("Value")
    table.add_column("Count", justify="right")
    for key, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(key, str(count))
    console.print(table)
