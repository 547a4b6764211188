from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, Annotated

import typer

from query_workbench.cli.commands._shared import get_client, get_config, output_result
from query_workbench.cli.helpers import format_execution_time, parse_selection
from query_workbench.core.exceptions import ExitCode, ValidationError
from query_workbench.core.query_source import resolve_query_source
from query_workbench.core.workbench import Workbench

if TYPE_CHECKING:
    from query_workbench.core.config import ResolvedConfig
    from query_workbench.core.execution import ExecutionReport


async def _execute(
    config: ResolvedConfig,
    text: str,
    selection: tuple[int, int] | None,
) -> tuple[Workbench, ExecutionReport | None]:
    async with get_client(config) as client:
        workbench = Workbench(config, client)
        tab = workbench.tabs.active_tab or workbench.tabs.add_tab()
        workbench.tabs.update_content(tab.id, text)
        report = await workbench.run(selection)
    return workbench, report


def query_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="Query file to execute"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Execute inline query text"),
    ] = None,
    select: Annotated[
        str | None,
        typer.Option(
            "--select", help="Only run the START:END character range of the text"
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Request timeout in seconds"),
    ] = None,
) -> None:
    """Execute a query from file, inline (-e), or stdin against the query service."""
    try:
        is_tty = sys.stdin.isatty()
    except (ValueError, AttributeError):
        is_tty = False
    if execute is None and file is None and is_tty:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        text = resolve_query_source(inline=execute, file_path=file)
        selection = parse_selection(select)
    except (ValidationError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    config = get_config(ctx, timeout=timeout)
    workbench, report = asyncio.run(_execute(config, text, selection))
    if report is None:
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output_result(ctx, report.result, workbench)
    typer.echo(
        f"{report.result.row_count} row(s) in "
        f"{format_execution_time(report.execution_time)}",
        err=True,
    )
    if report.error is not None:
        typer.echo(f"Error: {report.error.message}", err=True)
        raise typer.Exit(report.error.exit_code)
