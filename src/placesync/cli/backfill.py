"""Repository-wide backfill commands."""

from __future__ import annotations

import typer

from placesync.pipeline.backfill import BackfillReport, backfill_city_country, classify_temples

from .common import get_state, open_repository, render_summary


app = typer.Typer(
    add_completion=False,
    help="Backfill derived fields on every stored place.",
    no_args_is_help=True,
)


def _render_report(title: str, report: BackfillReport) -> None:
    render_summary(
        title,
        {"Examined": report.examined, "Updated": report.updated, "Unchanged": report.unchanged},
    )


def _city_country_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    report = backfill_city_country(open_repository(state))
    _render_report("City & country backfill", report)


def _temples_command(ctx: typer.Context) -> None:
    state = get_state(ctx)
    report = classify_temples(open_repository(state))
    _render_report("Temple classification", report)


app.command("city-country")(_city_country_command)
app.command("temples")(_temples_command)
