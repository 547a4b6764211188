"""Tests for the interactive workbench shell."""

from io import StringIO

import httpx
import pytest
from rich.console import Console

from query_workbench.cli.commands.shell import ShellSession, highlight_text


@pytest.fixture
def session(config, client):
    console = Console(file=StringIO(), width=120, force_terminal=False)
    return ShellSession(config, client, console=console)


def _output(session):
    return session.console.file.getvalue()


@pytest.mark.unit
async def test_text_lines_append_to_active_tab(session):
    await session.handle("SELECT name")
    await session.handle("FROM containers;")
    assert session.workbench.tabs.active_tab.content == "SELECT name\nFROM containers;"


@pytest.mark.unit
async def test_run_shows_result(session, service):
    service.result = [["name"], ["web"], ["db"]]
    await session.handle("SELECT name FROM containers;")
    await session.handle(":run")
    assert service.queries == ["SELECT name FROM containers"]
    output = _output(session)
    assert "web" in output
    assert "2 row(s)" in output


@pytest.mark.unit
async def test_run_with_selection(session, service):
    await session.handle("SELECT 1; SELECT 2")
    await session.handle(":run 10:18")
    assert service.queries == ["SELECT 2"]


@pytest.mark.unit
async def test_run_empty_tab_warns(session, service):
    await session.handle(":run")
    assert service.queries == []
    assert "Please enter a SQL query" in _output(session)


@pytest.mark.unit
async def test_failed_run_shows_error_row(session, service):
    service.response = httpx.Response(502)
    await session.handle("SELECT 1")
    await session.handle(":run")
    assert "Failed to execute query" in _output(session)
    assert not session.workbench.loading


@pytest.mark.unit
async def test_tab_commands(session):
    tabs = session.workbench.tabs
    await session.handle(":new containers")
    assert len(tabs) == 2
    assert tabs.active_tab.name == "containers"

    await session.handle(":rename images")
    assert tabs.active_tab.name == "images"

    await session.handle(":tab 1")
    assert tabs.active_id == "1"

    await session.handle(":close")
    assert tabs.active_tab.name == "images"

    await session.handle(":close")
    assert len(tabs) == 0
    await session.handle("SELECT 1")
    assert "No active tab" in _output(session)


@pytest.mark.unit
async def test_switch_to_unknown_tab(session):
    await session.handle(":tab 99")
    assert session.workbench.tabs.active_id == "1"
    assert "unknown tab" in _output(session)


@pytest.mark.unit
async def test_sort_toggles(session, service):
    service.result = [["n"], [3], [1], [2]]
    await session.handle("SELECT n")
    await session.handle(":run")
    await session.handle(":sort 0")
    rows = session.workbench.tabs.active_tab.query_result.rows
    assert rows == [[1], [2], [3]]
    await session.handle(":sort 0")
    rows = session.workbench.tabs.active_tab.query_result.rows
    assert rows == [[3], [2], [1]]


@pytest.mark.unit
async def test_bad_arguments_do_not_crash(session):
    assert await session.handle(":sort x") is True
    assert await session.handle(":width 0") is True
    assert "Invalid arguments" in _output(session)


@pytest.mark.unit
async def test_width(session, config):
    await session.handle(":width 1 -3")
    assert session.workbench.layout.widths == [
        config.column_width,
        config.column_width - 3,
    ]


@pytest.mark.unit
async def test_clear_and_show(session):
    await session.handle("SELECT 1")
    await session.handle(":show")
    assert "SELECT" in _output(session)
    await session.handle(":clear")
    assert session.workbench.tabs.active_tab.content == ""


@pytest.mark.unit
async def test_quit_and_unknown(session):
    assert await session.handle(":bogus") is True
    assert "Unknown command" in _output(session)
    assert await session.handle(":quit") is False


@pytest.mark.unit
def test_highlight_text_numbers_lines():
    text = highlight_text("SELECT 1\nFROM t")
    assert text.plain == "  1 SELECT 1\n  2 FROM t"


@pytest.mark.unit
async def test_unbalanced_quote_keeps_shell_running(session):
    tabs = session.workbench.tabs
    assert await session.handle(':rename "half') is True
    assert "Invalid arguments: No closing quotation" in _output(session)
    assert tabs.active_tab.name == "New Query"

    assert await session.handle(':rename "full name"') is True
    assert tabs.active_tab.name == "full name"
