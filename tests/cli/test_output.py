"""Tests for output format selection and TTY detection."""

import pytest

from query_workbench.cli.output import OutputFormat, get_formatter, resolve_format
from query_workbench.core.models import SortConfig
from query_workbench.formatters.csv import CSVFormatter
from query_workbench.formatters.json import JSONFormatter
from query_workbench.formatters.table import TableFormatter


@pytest.mark.unit
def test_output_format_enum_values():
    assert [f.value for f in OutputFormat] == ["table", "json", "csv"]


@pytest.mark.unit
def test_explicit_format_wins():
    assert resolve_format("json", default="csv") == "json"


@pytest.mark.unit
def test_configured_default_beats_tty(monkeypatch):
    monkeypatch.setattr("query_workbench.cli.output.detect_tty", lambda: True)
    assert resolve_format(None, default="json") == "json"


@pytest.mark.unit
def test_tty_defaults_to_table(monkeypatch):
    monkeypatch.setattr("query_workbench.cli.output.detect_tty", lambda: True)
    assert resolve_format(None) == "table"


@pytest.mark.unit
def test_non_tty_defaults_to_csv(monkeypatch):
    monkeypatch.setattr("query_workbench.cli.output.detect_tty", lambda: False)
    assert resolve_format(None) == "csv"


@pytest.mark.unit
def test_get_formatter_types():
    assert isinstance(get_formatter("csv", no_header=True), CSVFormatter)
    assert isinstance(get_formatter("json", compact=True), JSONFormatter)


@pytest.mark.unit
def test_get_formatter_table_options():
    sort = SortConfig(column_index=1)
    fmt = get_formatter("table", width=12, widths=[5, 6], sort=sort)
    assert isinstance(fmt, TableFormatter)
    assert fmt.width == 12
    assert fmt.widths == [5, 6]
    assert fmt.sort == sort
