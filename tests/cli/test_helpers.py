"""Tests for CLI formatting helpers."""

import pytest

from query_workbench.cli.helpers import format_execution_time, parse_selection


@pytest.mark.unit
@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (None, ""),
        (0, "0 ms"),
        (12.4, "12 ms"),
        (999, "999 ms"),
        (1500, "1.50 s"),
        (61_000, "1m 1s"),
    ],
)
def test_format_execution_time(ms, expected):
    assert format_execution_time(ms) == expected


@pytest.mark.unit
def test_parse_selection():
    assert parse_selection(None) is None
    assert parse_selection("") is None
    assert parse_selection("3:9") == (3, 9)


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["3", "a:b", "-1:4"])
def test_parse_selection_invalid(raw):
    with pytest.raises(ValueError):
        parse_selection(raw)
