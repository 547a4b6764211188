"""CSV formatter for QueryResult output (RFC 4180 compliant)."""

from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING

from query_workbench.core.sorting import cell_text
from query_workbench.formatters.base import RenderOptions, register_format

if TYPE_CHECKING:
    from collections.abc import Iterator

    from query_workbench.core.models import QueryResult


def _write_row(values: list[str]) -> str:
    buf = StringIO()
    writer = csv.writer(buf)
    writer.writerow(values)
    return buf.getvalue().rstrip("\r\n")


class CSVFormatter:
    def __init__(self, no_header: bool = False) -> None:
        self.no_header = no_header

    def format(self, result: QueryResult) -> Iterator[str]:
        if not self.no_header:
            yield _write_row([col.name for col in result.columns])

        for row in result.rows:
            yield _write_row([cell_text(v) for v in row])


@register_format("csv")
def _csv(options: RenderOptions) -> CSVFormatter:
    return CSVFormatter(no_header=options.no_header)
