"""JSON formatter for QueryResult output.

Rows become objects keyed by column name. Cells beyond the header (or a
header longer than the row) are dropped rather than failing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from query_workbench.formatters.base import RenderOptions, register_format

if TYPE_CHECKING:
    from collections.abc import Iterator

    from query_workbench.core.models import QueryResult


def _serialize_value(val: Any) -> Any:
    if isinstance(val, (int, float, str, bool, type(None), list, dict)):
        return val
    return str(val)


class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, result: QueryResult) -> Iterator[str]:
        rows_as_dicts = [
            {
                col.name: _serialize_value(val)
                for col, val in zip(result.columns, row, strict=False)
            }
            for row in result.rows
        ]

        if self.compact:
            yield json.dumps(rows_as_dicts, default=str)
        else:
            yield json.dumps(rows_as_dicts, indent=2, default=str)


@register_format("json")
def _json(options: RenderOptions) -> JSONFormatter:
    return JSONFormatter(compact=options.compact)
