"""Client-side sorting of result rows.

Numbers compare numerically; any other pair compares by text using the
process collation locale (``locale.strcoll``).
"""

from __future__ import annotations

import locale
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any

from query_workbench.core.logging import get_logger
from query_workbench.core.models import SortConfig, SortDirection

if TYPE_CHECKING:
    from collections.abc import Sequence

    from query_workbench.core.tabs import TabManager


def next_sort_config(current: SortConfig | None, column_index: int) -> SortConfig:
    """Direction toggle: descending only when re-sorting an ascending column."""
    if (
        current is not None
        and current.column_index == column_index
        and current.direction == SortDirection.ASC
    ):
        return SortConfig(column_index=column_index, direction=SortDirection.DESC)
    return SortConfig(column_index=column_index, direction=SortDirection.ASC)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def cell_text(value: Any) -> str:
    """Text form of a cell, as used for sorting and display."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compare_cells(a: Any, b: Any) -> int:
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    return locale.strcoll(cell_text(a), cell_text(b))


def _cell(row: Sequence[Any], column_index: int) -> Any:
    if 0 <= column_index < len(row):
        return row[column_index]
    return None


def sort_rows(
    rows: Sequence[Sequence[Any]], config: SortConfig
) -> list[list[Any]]:
    """Return a new list of rows ordered by ``config``; input is untouched."""
    index = config.column_index
    if config.direction == SortDirection.ASC:

        def cmp(a: Sequence[Any], b: Sequence[Any]) -> int:
            return compare_cells(_cell(a, index), _cell(b, index))

    else:

        def cmp(a: Sequence[Any], b: Sequence[Any]) -> int:
            return compare_cells(_cell(b, index), _cell(a, index))

    return [list(row) for row in sorted(rows, key=cmp_to_key(cmp))]


class SortEngine:
    """Holds the workbench-wide sort state and applies it to the active tab."""

    def __init__(self, tabs: TabManager) -> None:
        self.tabs = tabs
        self.config: SortConfig | None = None

    def reset(self) -> None:
        self.config = None

    def sort(self, column_index: int) -> SortConfig | None:
        """Sort the active tab's result by ``column_index``.

        Returns the new SortConfig, or None when there is nothing to sort
        (no active tab, no result, index out of range, or an error result).
        """
        log = get_logger("sorting")
        tab = self.tabs.active_tab
        if tab is None or tab.query_result is None:
            log.debug("sort ignored, no result", column_index=column_index)
            return None
        columns = tab.query_result.columns
        if not (0 <= column_index < len(columns)):
            log.warning("sort ignored, column out of range", column_index=column_index)
            return None
        if tab.query_result.is_error:
            log.debug("sort ignored, error result", column_index=column_index)
            return None

        self.config = next_sort_config(self.config, column_index)
        rows = sort_rows(tab.query_result.rows, self.config)
        self.tabs.replace_rows(tab.id, rows)
        log.debug(
            "sorted result",
            tab_id=tab.id,
            column_index=column_index,
            direction=self.config.direction.value,
        )
        return self.config
