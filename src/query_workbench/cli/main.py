"""Query Workbench main entry point and command registration."""

from __future__ import annotations

import locale
from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from query_workbench.__about__ import __version__
from query_workbench.cli.commands.config import config_app
from query_workbench.cli.commands.highlight import highlight_command
from query_workbench.cli.commands.query import query_command
from query_workbench.cli.commands.shell import shell_command
from query_workbench.cli.output import OutputFormat  # noqa: TC001
from query_workbench.core.exceptions import WorkbenchError
from query_workbench.core.logging import get_logger, setup_logging
from query_workbench.core.monitoring import setup_sentry, start_command_transaction

app = typer.Typer(
    help="Query Workbench - multi-tab query editor for a remote query service",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("query")(query_command)
app.command("shell")(shell_command)
app.command("highlight")(highlight_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"query-workbench {__version__}")
        raise typer.Exit()


def _setup_collation() -> None:
    """Use the user's locale for text sorting of result columns."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        get_logger("cli").debug("collation locale unavailable", error=str(e))


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log everything down to DEBUG"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log threshold: debug, info, warning or error",
        ),
    ] = None,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named service profile"),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="Query service base URL"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Request timeout in seconds"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: table|json|csv"),
    ] = None,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
    width: Annotated[
        int | None,
        typer.Option("--width", help="Column width for table format"),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Suppress header row in CSV output"),
    ] = False,
) -> None:
    """Query Workbench - multi-tab query editor for a remote query service."""
    setup_logging(verbose, log_level)
    setup_sentry()
    start_command_transaction(ctx.invoked_subcommand)
    _setup_collation()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["profile"] = profile
    ctx.obj["url"] = url
    ctx.obj["timeout"] = timeout
    ctx.obj["config_file"] = config_file

    ctx.obj["format"] = format.value if format else None
    ctx.obj["compact"] = compact
    ctx.obj["width"] = width
    ctx.obj["no_header"] = no_header


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except WorkbenchError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
