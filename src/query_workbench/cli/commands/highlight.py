from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from query_workbench.cli.commands.shell import highlight_text
from query_workbench.core.exceptions import ExitCode, ValidationError
from query_workbench.core.highlight import highlight_html
from query_workbench.core.query_source import resolve_query_source


def highlight_command(
    file: Annotated[
        str | None,
        typer.Argument(help="Query file to highlight"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Highlight inline query text"),
    ] = None,
    as_html: Annotated[
        bool,
        typer.Option("--html", help="Emit HTML spans instead of terminal colors"),
    ] = False,
) -> None:
    """Print query text with keywords and operators highlighted."""
    try:
        text = resolve_query_source(inline=execute, file_path=file)
    except ValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    if as_html:
        for line in text.rstrip("\n").split("\n"):
            typer.echo(highlight_html(line))
        return

    Console().print(highlight_text(text.rstrip("\n")))
