"""Data models for Query Workbench.

Pydantic models for result columns, normalized query results, editor
tabs and the active sort.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ColumnType(StrEnum):
    """Closed set of column type tags understood by the workbench."""

    NUMBER = "NUMBER"
    INT = "INT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    CONTAINER = "CONTAINER"
    METADATA = "METADATA"
    RUN_CMD = "RUN_CMD"
    START = "START"
    STOP = "STOP"
    PAUSE = "PAUSE"
    UNPAUSE = "UNPAUSE"
    REMOVE = "REMOVE"
    RESTART = "RESTART"
    KILL = "KILL"
    COUNT = "COUNT"
    SUM = "SUM"
    LENGTH = "LENGTH"
    UNKNOWN = "UNKNOWN"


class Column(BaseModel):
    """A single result column.

    ``type`` is always a member of ColumnType; ``type_name`` keeps the
    upper-cased tag exactly as the service sent it, so tags outside the
    enumeration survive for display.
    """

    name: str
    type: ColumnType = ColumnType.UNKNOWN
    type_name: str = ColumnType.UNKNOWN.value


class QueryResult(BaseModel):
    """Canonical result: ordered columns and ordered rows of cells."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    columns: list[Column]
    rows: list[list[Any]]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_error(self) -> bool:
        """Single unnamed column carrying explanatory rows."""
        return len(self.columns) == 1 and self.columns[0].name == ""


class Tab(BaseModel):
    """One query-editing session."""

    id: str
    name: str = "New Query"
    content: str = ""
    query_result: QueryResult | None = None
    execution_time: float | None = Field(
        default=None, description="Milliseconds spent on the last execution"
    )


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    column_index: int
    direction: SortDirection = SortDirection.ASC
