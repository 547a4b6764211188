"""Column type parsing and display classification.

``parse_column_type`` is total: anything outside the enumeration maps to
UNKNOWN. ``classify`` maps a tag to the display category used to pick a
header affordance; UNKNOWN has no category.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from query_workbench.core.models import ColumnType


class ColumnCategory(StrEnum):
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"
    CONTAINER = "container"
    METADATA = "metadata"
    COMMAND = "command"
    START = "start"
    STOP = "stop"
    PAUSE = "pause"
    RESUME = "resume"
    REMOVE = "remove"
    RESTART = "restart"
    KILL = "kill"
    AGGREGATE = "aggregate"


_CATEGORIES: dict[ColumnType, ColumnCategory] = {
    ColumnType.NUMBER: ColumnCategory.NUMERIC,
    ColumnType.INT: ColumnCategory.NUMERIC,
    ColumnType.STRING: ColumnCategory.TEXT,
    ColumnType.BOOLEAN: ColumnCategory.BOOLEAN,
    ColumnType.CONTAINER: ColumnCategory.CONTAINER,
    ColumnType.METADATA: ColumnCategory.METADATA,
    ColumnType.RUN_CMD: ColumnCategory.COMMAND,
    ColumnType.START: ColumnCategory.START,
    ColumnType.STOP: ColumnCategory.STOP,
    ColumnType.PAUSE: ColumnCategory.PAUSE,
    ColumnType.UNPAUSE: ColumnCategory.RESUME,
    ColumnType.REMOVE: ColumnCategory.REMOVE,
    ColumnType.RESTART: ColumnCategory.RESTART,
    ColumnType.KILL: ColumnCategory.KILL,
    ColumnType.COUNT: ColumnCategory.AGGREGATE,
    ColumnType.SUM: ColumnCategory.AGGREGATE,
    ColumnType.LENGTH: ColumnCategory.AGGREGATE,
}

# Terminal glyphs shown in table headers.
_GLYPHS: dict[ColumnCategory, str] = {
    ColumnCategory.NUMERIC: "#",
    ColumnCategory.TEXT: "Aa",
    ColumnCategory.BOOLEAN: "◐",
    ColumnCategory.CONTAINER: "▣",
    ColumnCategory.METADATA: "≡",
    ColumnCategory.COMMAND: ">_",
    ColumnCategory.START: "▶",
    ColumnCategory.STOP: "■",
    ColumnCategory.PAUSE: "⏸",
    ColumnCategory.RESUME: "⏵",
    ColumnCategory.REMOVE: "⊖",
    ColumnCategory.RESTART: "↻",
    ColumnCategory.KILL: "✕",
    ColumnCategory.AGGREGATE: "Σ",
}


def normalize_type_name(raw: Any) -> str:
    """Upper-case a raw type tag; non-strings are stringified first."""
    if raw is None:
        return ColumnType.UNKNOWN.value
    return str(raw).upper()


def parse_column_type(raw: Any) -> ColumnType:
    """Map a raw type tag to ColumnType, falling back to UNKNOWN."""
    try:
        return ColumnType(normalize_type_name(raw))
    except ValueError:
        return ColumnType.UNKNOWN


def classify(column_type: ColumnType) -> ColumnCategory | None:
    return _CATEGORIES.get(column_type)


def type_glyph(column_type: ColumnType) -> str | None:
    """Header affordance for a column type, or None for no affordance."""
    category = classify(column_type)
    if category is None:
        return None
    return _GLYPHS[category]
