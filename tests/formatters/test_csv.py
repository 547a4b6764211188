"""Tests for CSVFormatter."""

import pytest

from query_workbench.core.models import Column, QueryResult
from query_workbench.formatters.base import Formatter
from query_workbench.formatters.csv import CSVFormatter


def _make_result(rows=None):
    if rows is None:
        rows = [[1, "alice"], [2, "bob"]]
    return QueryResult(columns=[Column(name="id"), Column(name="name")], rows=rows)


@pytest.mark.unit
def test_csv_formatter_implements_protocol():
    assert isinstance(CSVFormatter(), Formatter)


@pytest.mark.unit
def test_csv_formatter_header_and_rows():
    assert list(CSVFormatter().format(_make_result())) == [
        "id,name",
        "1,alice",
        "2,bob",
    ]


@pytest.mark.unit
def test_csv_formatter_no_header():
    lines = list(CSVFormatter(no_header=True).format(_make_result()))
    assert lines == ["1,alice", "2,bob"]


@pytest.mark.unit
def test_csv_formatter_quotes_special_characters():
    lines = list(CSVFormatter().format(_make_result(rows=[[1, 'say "hi", bye']])))
    assert lines[1] == '1,"say ""hi"", bye"'


@pytest.mark.unit
def test_csv_formatter_none_and_bool():
    lines = list(CSVFormatter().format(_make_result(rows=[[None, True]])))
    assert lines[1] == ",true"
