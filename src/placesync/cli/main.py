"""Primary Typer application wiring the placesync CLI."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import typer

from placesync.errors import PlaceSyncError
from placesync.utils.logging import configure_logging

from . import backfill, places
from .common import CLIError, configure_state, console, parse_override, render_summary


class PlacesyncTyper(typer.Typer):
    """Typer subclass that supports registering exception handlers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._exception_handlers: list[tuple[type[BaseException], Callable[[BaseException], Any]]] = []

    def exception_handler(
        self, exception_type: type[BaseException]
    ) -> Callable[[Callable[[BaseException], Any]], Callable[[BaseException], Any]]:
        def decorator(handler: Callable[[BaseException], Any]) -> Callable[[BaseException], Any]:
            self._exception_handlers.append((exception_type, handler))
            return handler

        return decorator

    def _resolve_handler(self, exception: BaseException) -> Callable[[BaseException], Any] | None:
        for registered_type, handler in self._exception_handlers:
            if isinstance(exception, registered_type):
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except BaseException as exc:  # pragma: no cover - CLI surface behaviour
            handler = self._resolve_handler(exc)
            if handler is None:
                raise
            result = handler(exc)
            if isinstance(result, BaseException):
                raise result
            return result


app = PlacesyncTyper(
    add_completion=False,
    help="""
    Collect places to visit into a Notion database, merging duplicates and
    enriching city, country and temple metadata along the way.
    """.strip(),
    no_args_is_help=True,
)


@app.exception_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.exception_handler(PlaceSyncError)
def handle_placesync_error(exception: PlaceSyncError) -> typer.Exit:
    """Render storage and configuration failures raised by commands."""

    console.print(f"[bold red]{type(exception).__name__}:[/bold red] {exception}")
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    state = configure_state(
        ctx,
        environment=environment,
        overrides=overrides,
        verbose=verbose,
    )
    configure_logging(state.settings, level="DEBUG" if verbose else None)

    if verbose:
        notion = state.settings.notion
        render_summary(
            "CLI Context",
            {
                "Environment": state.environment,
                "Policy version": state.settings.policy_version,
                "Notion database": notion.database_id or "<unset>",
                "Credentials": "configured" if notion.configured else "missing",
            },
        )


places.register(app)
app.add_typer(backfill.app, name="backfill", help="Backfill derived fields")
