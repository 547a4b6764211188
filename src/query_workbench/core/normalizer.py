"""Response normalization into the canonical QueryResult.

The service answers with a list of rows whose first row describes the
columns. Three header conventions are recognized, checked in order:

1. Sentinel: ``[""]`` - the service reports an error; the next row (if
   any) is the explanation.
2. Typed header: ``[{"name": ..., "type": ...}, ...]``.
3. Plain header: ``["a", "b", ...]``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from query_workbench.core.column_types import normalize_type_name, parse_column_type
from query_workbench.core.exceptions import MalformedResponse
from query_workbench.core.logging import get_logger
from query_workbench.core.models import Column, ColumnType, QueryResult


def _is_row(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_sentinel_header(header: Sequence[Any]) -> bool:
    return len(header) == 1 and header[0] == ""


def _is_typed_cell(cell: Any) -> bool:
    return isinstance(cell, Mapping) and "name" in cell and "type" in cell


def _is_typed_header(header: Sequence[Any]) -> bool:
    return len(header) > 0 and _is_typed_cell(header[0])


def error_column(name: str = "") -> Column:
    return Column(name=name, type=ColumnType.UNKNOWN)


def _typed_columns(header: Sequence[Any]) -> list[Column]:
    columns: list[Column] = []
    for position, cell in enumerate(header):
        if not _is_typed_cell(cell):
            msg = f"Header cell {position} is missing 'name' or 'type'"
            raise MalformedResponse(msg)
        type_name = normalize_type_name(cell["type"])
        columns.append(
            Column(
                name=_column_name(cell["name"]),
                type=parse_column_type(type_name),
                type_name=type_name,
            )
        )
    return columns


def _column_name(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        msg = f"Column name must be a scalar, got {type(value).__name__}"
        raise MalformedResponse(msg)
    return str(value)


def _plain_columns(header: Sequence[Any]) -> list[Column]:
    return [Column(name=_column_name(cell)) for cell in header]


def _data_rows(rows: Sequence[Any]) -> list[list[Any]]:
    result: list[list[Any]] = []
    for position, row in enumerate(rows, start=1):
        if not _is_row(row):
            msg = f"Row {position} is not an array"
            raise MalformedResponse(msg)
        result.append(list(row))
    return result


def normalize_response(payload: Any) -> QueryResult:
    """Turn the raw ``result`` payload into a QueryResult.

    Raises MalformedResponse when the payload is not a non-empty list of
    rows or a header cannot be interpreted.
    """
    log = get_logger("normalizer")

    if not _is_row(payload):
        raise MalformedResponse("Invalid response format from server.")
    if len(payload) == 0:
        raise MalformedResponse("Invalid response format from server: no rows.")
    header = payload[0]
    if not _is_row(header):
        raise MalformedResponse(
            "Invalid response format from server: header is not an array."
        )

    if _is_sentinel_header(header):
        rows = _data_rows(payload[1:2])
        log.debug("sentinel response", explanation_rows=len(rows))
        return QueryResult(columns=[error_column()], rows=rows)

    if _is_typed_header(header):
        columns = _typed_columns(header)
        shape = "typed"
    else:
        columns = _plain_columns(header)
        shape = "plain"

    rows = _data_rows(payload[1:])
    log.debug("normalized response", shape=shape, columns=len(columns), rows=len(rows))
    return QueryResult(columns=columns, rows=rows)


def error_result(message: str, column_name: str = "") -> QueryResult:
    """Synthetic one-column, one-row result describing a failure."""
    return QueryResult(columns=[error_column(column_name)], rows=[[message]])
