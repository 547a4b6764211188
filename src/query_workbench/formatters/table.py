"""Rich table formatter for QueryResult output.

Headers carry the column's type glyph and, for the sorted column, an
arrow. Per-column widths come from the session's ColumnLayout.
"""

from __future__ import annotations

import shutil
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from query_workbench.core.column_types import type_glyph
from query_workbench.core.models import SortDirection
from query_workbench.core.sorting import cell_text
from query_workbench.formatters.base import RenderOptions, register_format

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from query_workbench.core.models import Column, QueryResult, SortConfig

_NO_RESULTS = "No results"
_ARROWS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"


def header_label(column: Column, index: int, sort: SortConfig | None = None) -> str:
    parts = []
    glyph = type_glyph(column.type)
    if glyph:
        parts.append(glyph)
    if column.name:
        parts.append(column.name)
    if sort is not None and sort.column_index == index:
        parts.append(_ARROWS[sort.direction])
    return " ".join(parts)


class TableFormatter:
    def __init__(
        self,
        width: int = 40,
        widths: Sequence[int] | None = None,
        sort: SortConfig | None = None,
    ) -> None:
        self.width = width
        self.widths = list(widths or [])
        self.sort = sort

    def _column_width(self, index: int) -> int:
        if index < len(self.widths):
            return self.widths[index]
        return self.width

    def format(self, result: QueryResult) -> Iterator[str]:
        if not result.rows:
            yield _NO_RESULTS
            return

        table = Table(show_edge=True, pad_edge=True)
        for index, col in enumerate(result.columns):
            table.add_column(
                header_label(col, index, self.sort),
                no_wrap=True,
                max_width=self._column_width(index),
            )

        for row in result.rows:
            table.add_row(
                *(
                    _truncate(cell_text(v), self._column_width(i))
                    for i, v in enumerate(row)
                )
            )

        buf = StringIO()
        term_width = shutil.get_terminal_size((120, 24)).columns
        console = Console(file=buf, force_terminal=True, width=term_width)
        console.print(table)
        yield buf.getvalue().rstrip("\n")


@register_format("table")
def _table(options: RenderOptions) -> TableFormatter:
    return TableFormatter(
        width=options.width, widths=options.widths, sort=options.sort
    )
