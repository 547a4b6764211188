"""Output format selection and TTY auto-detection."""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TYPE_CHECKING

from query_workbench.formatters import RenderOptions, create_formatter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from query_workbench.core.models import QueryResult, SortConfig
    from query_workbench.formatters.base import Formatter


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def detect_tty() -> bool:
    return sys.stdout.isatty()


def resolve_format(format_flag: str | None, default: str | None = None) -> str:
    """Determine the output format.

    Explicit --format overrides the configured default, which overrides
    TTY detection (table for TTY, csv for pipes).
    """
    if format_flag is not None:
        return format_flag
    if default is not None:
        return default
    return "table" if detect_tty() else "csv"


def get_formatter(
    format_flag: str | None = None,
    *,
    default: str | None = None,
    compact: bool = False,
    width: int = 40,
    widths: Sequence[int] | None = None,
    sort: SortConfig | None = None,
    no_header: bool = False,
) -> Formatter:
    """Build the formatter for the resolved output format."""
    options = RenderOptions(
        compact=compact,
        width=width,
        widths=tuple(widths or ()),
        sort=sort,
        no_header=no_header,
    )
    return create_formatter(resolve_format(format_flag, default), options)


def write_output(formatter: Formatter, result: QueryResult) -> None:
    """Write formatted output to stdout."""
    for line in formatter.format(result):
        sys.stdout.write(line + "\n")
