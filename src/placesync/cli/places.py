"""Place management commands: add, import, lookup, listing, visits and stats."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.table import Table

from placesync.entities.core import Location, PlaceCategory, PlaceRecord, PlaceStatus, VisitLog
from placesync.enrichment import enrich_record, parse_maps_url
from placesync.errors import TextImportError
from placesync.importers.text import entry_to_record, load_text_file
from placesync.pipeline.deduplication import (
    DuplicateMatcher,
    MergeOptions,
    MergeResolver,
    ResolveAction,
    batch_import_places,
)
from placesync.pipeline.listing import filter_places, lookup_places
from placesync.pipeline.stats import compute_place_stats
from placesync.utils.logging import logging_context

from .common import (
    CLIError,
    CLIState,
    console,
    get_state,
    open_repository,
    render_counts,
    render_matches,
    render_summary,
    resolve_path,
)


def _merge_options(force: bool, skip: bool, no_merge: bool) -> MergeOptions:
    if force and skip:
        raise CLIError("--force and --skip cannot be combined")
    return MergeOptions(force=force, merge=not no_merge, skip=skip)


def _parse_category(label: Optional[str]) -> PlaceCategory | None:
    if label is None:
        return None
    try:
        return PlaceCategory.parse(label)
    except ValueError as exc:
        choices = ", ".join(member.value for member in PlaceCategory)
        raise CLIError(f"Unknown category '{label}'. Choose one of: {choices}") from exc


def _parse_status(label: Optional[str]) -> str | None:
    if label is None:
        return None
    try:
        return PlaceStatus.parse(label).value
    except ValueError as exc:
        choices = ", ".join(member.value for member in PlaceStatus)
        raise CLIError(f"Unknown status '{label}'. Choose one of: {choices}") from exc


def build_candidate(
    state: CLIState,
    *,
    name: str,
    category: Optional[str] = None,
    url: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    address: Optional[str] = None,
    sources: Optional[List[str]] = None,
    notes: Optional[str] = None,
    status: Optional[str] = None,
) -> PlaceRecord:
    """Assemble and enrich a candidate record from command-line values.

    An address given without coordinates cannot be stored on the record, but
    it still feeds city, country and temple enrichment.
    """

    if (lat is None) != (lon is None):
        raise CLIError("--lat and --lon must be given together")
    if lat is None and url:
        info = parse_maps_url(url)
        if info is not None and info.has_coordinates:
            lat, lon = info.lat, info.lon

    location = None
    if lat is not None and lon is not None:
        try:
            location = Location(lat=lat, lon=lon, address=address)
        except ValueError as exc:
            raise CLIError(f"Invalid coordinates: {exc}") from exc

    enrichment = state.settings.policies.enrichment
    try:
        record = PlaceRecord(
            name=name,
            category=_parse_category(category),
            location=location,
            url=url,
            sources=sources or [enrichment.manual_source],
            status=_parse_status(status) or enrichment.default_status,
            notes=notes,
        )
    except ValueError as exc:
        raise CLIError(f"Invalid place: {exc}") from exc
    return enrich_record(record, enrichment, address=address)


def _add_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Place name."),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Place category."),
    url: Optional[str] = typer.Option(None, "--url", help="Link to the place, e.g. a Maps URL."),
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude in decimal degrees."),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude in decimal degrees."),
    address: Optional[str] = typer.Option(None, "--address", help="Formatted address."),
    source: List[str] = typer.Option(  # noqa: B008 - Typer signature
        [],
        "--source",
        "-s",
        help="Source tag (repeatable); defaults to the manual source.",
    ),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-form notes."),
    status: Optional[str] = typer.Option(
        None,
        "--status",
        help="Want to go, Visited or Maybe; defaults to the configured status.",
    ),
    force: bool = typer.Option(False, "--force", help="Create without checking for duplicates."),
    skip: bool = typer.Option(False, "--skip", help="Do nothing when a duplicate exists."),
    no_merge: bool = typer.Option(False, "--no-merge", help="Report duplicates instead of merging."),
) -> None:
    state = get_state(ctx)
    options = _merge_options(force, skip, no_merge)
    candidate = build_candidate(
        state,
        name=name,
        category=category,
        url=url,
        lat=lat,
        lon=lon,
        address=address,
        sources=source,
        notes=notes,
        status=status,
    )
    repository = open_repository(state)
    resolver = MergeResolver(repository, state.settings.policies.deduplication)
    result = resolver.resolve(candidate, options)

    console.print(f"[green]{result.message}[/green]")
    if result.match is not None:
        console.print(f"Matched: {result.match.record.name} ({'; '.join(result.match.reasons)})")
    if result.action is ResolveAction.DUPLICATE_FOUND:
        render_matches("Potential duplicates", result.matches)


def _import_text_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Text file listing one place per line."),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Source tag for imported places."),
    force: bool = typer.Option(False, "--force", help="Create without checking for duplicates."),
    skip: bool = typer.Option(False, "--skip", help="Leave duplicates untouched."),
    no_merge: bool = typer.Option(False, "--no-merge", help="Report duplicates instead of merging."),
) -> None:
    state = get_state(ctx)
    options = _merge_options(force, skip, no_merge)
    path = resolve_path(file)
    try:
        entries = load_text_file(path)
    except TextImportError as exc:
        raise CLIError(str(exc)) from exc
    if not entries:
        console.print("[yellow]No places found in file.[/yellow]")
        return

    enrichment = state.settings.policies.enrichment
    candidates = [
        enrich_record(entry_to_record(entry, path.name, source=source, policy=enrichment), enrichment)
        for entry in entries
    ]
    repository = open_repository(state)
    resolver = MergeResolver(repository, state.settings.policies.deduplication)
    with logging_context(step="import_text"):
        result = batch_import_places(resolver, candidates, options)

    render_summary(
        f"Imported {path.name}",
        {label.capitalize(): count for label, count in result.summary().items()},
    )
    for error in result.errors:
        console.print(f"[red]Failed:[/red] {error.record.name}: {error.error}")


def _duplicates_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Place name to look up."),
    url: Optional[str] = typer.Option(None, "--url", help="Place URL."),
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude in decimal degrees."),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude in decimal degrees."),
    address: Optional[str] = typer.Option(None, "--address", help="Formatted address."),
) -> None:
    state = get_state(ctx)
    candidate = build_candidate(state, name=name, url=url, lat=lat, lon=lon, address=address)
    repository = open_repository(state)
    matcher = DuplicateMatcher(repository, state.settings.policies.deduplication)
    matches = matcher.find_matches(candidate)
    if not matches:
        console.print("[green]No duplicates found.[/green]")
        return
    render_matches(f"Potential duplicates of {candidate.name}", matches)


def _list_command(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only places of this category."),
    status: Optional[str] = typer.Option(None, "--status", help="Only places with this status."),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Only places carrying this source tag."),
) -> None:
    state = get_state(ctx)
    wanted_category = _parse_category(category)
    wanted_status = _parse_status(status)
    repository = open_repository(state)
    places = filter_places(
        repository.list_all(),
        category=wanted_category,
        status=wanted_status,
        source=source,
    )

    filters = []
    if wanted_category is not None:
        filters.append(f"Category: {wanted_category.value}")
    if wanted_status:
        filters.append(f"Status: {wanted_status}")
    if source:
        filters.append(f"Source: {source}")
    console.print(f"[bold]{', '.join(filters) or 'All places'} ({len(places)} places)[/bold]")
    if not places:
        console.print("No places found.")
        return

    table = Table(box=None)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Status")
    table.add_column("City")
    table.add_column("Sources")
    for place in places:
        table.add_row(
            place.id or "-",
            place.name,
            place.category.value if place.category else "-",
            place.status,
            place.city or "-",
            ", ".join(place.sources),
        )
    console.print(table)


def _visit_command(
    ctx: typer.Context,
    place: str = typer.Argument(..., help="Place id or exact name."),
    visited_on: Optional[datetime] = typer.Option(
        None,
        "--date",
        formats=["%Y-%m-%d"],
        help="Visit date; defaults to today.",
        show_default=False,
    ),
    cost: Optional[str] = typer.Option(None, "--cost", help='Cost, e.g. "$50".'),
    notes: Optional[str] = typer.Option(None, "--notes", help="Notes about the visit."),
    photo: List[str] = typer.Option(  # noqa: B008 - Typer signature
        [],
        "--photo",
        help="Photo URL (repeatable).",
    ),
) -> None:
    state = get_state(ctx)
    try:
        visit = VisitLog(
            visited_on=visited_on.date() if visited_on else datetime.now().date(),
            cost=cost,
            notes=notes,
            photos=photo,
        )
    except ValidationError as exc:
        raise CLIError(f"Invalid visit: {exc}") from exc

    repository = open_repository(state)
    candidates = lookup_places(repository.list_all(), place)
    if not candidates:
        raise CLIError(f"No place matches '{place}'")
    if len(candidates) > 1:
        ids = ", ".join(candidate.id or "-" for candidate in candidates)
        raise CLIError(f"'{place}' matches several places ({ids}); pass the id instead")

    target = candidates[0]
    if target.id is None:
        raise CLIError(f"Place '{target.name}' has no identifier")
    updated = repository.append_visit(target.id, visit)
    console.print(f"[green]Logged visit to {updated.name} on {visit.visited_on.isoformat()}[/green]")
    console.print(f"Status: {updated.status}")


def _stats_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    repository = open_repository(state)
    stats = compute_place_stats(repository.list_all())
    console.print(f"Total places: {stats.total}")
    render_counts("By category", stats.by_category)
    render_counts("By status", stats.by_status)
    render_counts("By source", stats.by_source)


def _check_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    repository = open_repository(state)
    title = repository.check_connection()
    console.print(f"[green]Connected to Notion database:[/green] {title}")


def register(app: typer.Typer) -> None:
    app.command("add")(_add_command)
    app.command("import-text")(_import_text_command)
    app.command("duplicates")(_duplicates_command)
    app.command("list")(_list_command)
    app.command("visit")(_visit_command)
    app.command("stats")(_stats_command)
    app.command("check")(_check_command)
