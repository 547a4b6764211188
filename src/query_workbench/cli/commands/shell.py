"""Interactive workbench shell.

Lines starting with ':' are commands; anything else is appended to the
active tab's query text.
"""

from __future__ import annotations

import asyncio
import shlex
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.text import Text

from query_workbench.cli.commands._shared import get_client, get_config
from query_workbench.cli.helpers import format_execution_time, parse_selection
from query_workbench.cli.output import get_formatter
from query_workbench.core.exceptions import ValidationError
from query_workbench.core.highlight import SpanKind, tokenize_line
from query_workbench.core.logging import get_logger
from query_workbench.core.workbench import Workbench

if TYPE_CHECKING:
    from rich.progress import TaskID

    from query_workbench.core.client import QueryServiceClient
    from query_workbench.core.config import ResolvedConfig

_STYLES = {
    SpanKind.KEYWORD: "bold #4A90E2",
    SpanKind.OPERATOR: "#D0021B",
    SpanKind.PLAIN: "",
}

HELP_TEXT = """\
:new [NAME]          open a new tab
:close [ID]          close a tab (default: active)
:tabs                list tabs
:tab ID              switch the active tab
:rename NAME         rename the active tab
:run [START:END]     run the selection, or every statement of the tab
:sort COL            sort the result by column COL (toggles direction)
:width COL DELTA     widen or narrow a result column
:show                show the active tab
:clear               clear the active tab's text
:help                show this help
:quit                leave the shell"""


def highlight_text(content: str) -> Text:
    """Editor view: line numbers plus keyword/operator highlighting."""
    text = Text()
    lines = content.split("\n")
    for number, line in enumerate(lines, start=1):
        text.append(f"{number:>3} ", style="dim")
        for span in tokenize_line(line, escape=False):
            text.append(span.text, style=_STYLES[span.kind])
        if number < len(lines):
            text.append("\n")
    return text


class ShellSession:
    def __init__(
        self,
        config: ResolvedConfig,
        client: QueryServiceClient,
        console: Console | None = None,
    ) -> None:
        self.console = console or Console()
        self._progress: Progress | None = None
        self._progress_task: TaskID | None = None
        self.workbench = Workbench(config, client, on_progress=self._on_progress)

    def _on_progress(self, value: float) -> None:
        if self._progress is not None and self._progress_task is not None:
            self._progress.update(self._progress_task, completed=value)

    def _active_id(self) -> str | None:
        tab = self.workbench.tabs.active_tab
        return tab.id if tab is not None else None

    def render_tabs(self) -> None:
        tabs = self.workbench.tabs
        if not len(tabs):
            self.console.print("No tabs open. Use :new to open one.")
            return
        for tab in tabs:
            marker = "*" if tab.id == tabs.active_id else " "
            self.console.print(f"{marker} [{tab.id}] {tab.name}", markup=False)

    def render_result(self) -> None:
        tab = self.workbench.tabs.active_tab
        if tab is None or tab.query_result is None:
            return
        formatter = get_formatter(
            "table",
            width=self.workbench.config.column_width,
            widths=self.workbench.layout.widths,
            sort=self.workbench.sort_config,
        )
        for line in formatter.format(tab.query_result):
            self.console.out(line, highlight=False)
        self.console.print(
            f"{tab.query_result.row_count} row(s) in "
            f"{format_execution_time(tab.execution_time)}",
            style="dim",
        )

    def render_tab(self) -> None:
        tab = self.workbench.tabs.active_tab
        if tab is None:
            self.render_tabs()
            return
        self.console.print(f"[{tab.id}] {tab.name}", style="bold", markup=False)
        if tab.content:
            self.console.print(highlight_text(tab.content))
        self.render_result()

    async def run(self, selection: tuple[int, int] | None) -> None:
        with Progress(
            TextColumn("Executing"), BarColumn(), console=self.console, transient=True
        ) as progress:
            self._progress = progress
            self._progress_task = progress.add_task("query", total=100)
            try:
                report = await self.workbench.run(selection)
            finally:
                self._progress = None
                self._progress_task = None
        if report is not None:
            self.render_result()

    async def handle(self, line: str) -> bool:
        """Process one input line. Returns False when the shell should exit."""
        tabs = self.workbench.tabs
        if not line.startswith(":"):
            tab = tabs.active_tab
            if tab is None:
                self.console.print("No active tab. Use :new to open one.")
                return True
            content = f"{tab.content}\n{line}" if tab.content else line
            tabs.update_content(tab.id, content)
            return True

        try:
            parts = shlex.split(line[1:]) or [""]
            return await self._dispatch(parts[0], parts[1:])
        except ValidationError as exc:
            self.console.print(exc.message, style="yellow", markup=False)
        except (ValueError, IndexError) as exc:
            self.console.print(f"Invalid arguments: {exc}", style="red", markup=False)
        return True

    async def _dispatch(self, command: str, args: list[str]) -> bool:
        tabs = self.workbench.tabs
        active_id = self._active_id()
        if command in ("quit", "q", "exit"):
            return False
        if command == "help":
            self.console.print(HELP_TEXT, markup=False)
        elif command == "new":
            if args:
                tabs.add_tab(" ".join(args))
            else:
                tabs.add_tab()
            self.render_tabs()
        elif command == "close":
            target = args[0] if args else active_id
            if target is not None:
                tabs.remove_tab(target)
            self.render_tabs()
        elif command == "tabs":
            self.render_tabs()
        elif command == "tab":
            if not args or args[0] not in tabs:
                raise ValueError(f"unknown tab {' '.join(args)!r}")
            tabs.set_active(args[0])
            self.render_tab()
        elif command == "rename":
            if active_id is not None and args:
                tabs.rename_tab(active_id, " ".join(args))
            self.render_tabs()
        elif command == "run":
            await self.run(parse_selection(args[0] if args else None))
        elif command == "sort":
            if self.workbench.sort(int(args[0])) is not None:
                self.render_result()
        elif command == "width":
            self.workbench.layout.resize(int(args[0]), int(args[1]))
            self.render_result()
        elif command == "show":
            self.render_tab()
        elif command == "clear":
            if active_id is not None:
                tabs.update_content(active_id, "")
        else:
            self.console.print(f"Unknown command :{command}. Try :help", markup=False)
        return True

    async def loop(self) -> None:
        log = get_logger("cli")
        self.console.print("Query Workbench. Type :help for commands.")
        while True:
            tab = self.workbench.tabs.active_tab
            prompt = f"{tab.name if tab else '-'}> "
            try:
                line = await asyncio.to_thread(self.console.input, prompt)
            except EOFError:
                break
            if not await self.handle(line):
                break
        log.debug("shell closed")


async def _shell(config: ResolvedConfig) -> None:
    async with get_client(config) as client:
        await ShellSession(config, client).loop()


def shell_command(ctx: typer.Context) -> None:
    """Open the interactive multi-tab query workbench."""
    config = get_config(ctx)
    asyncio.run(_shell(config))
