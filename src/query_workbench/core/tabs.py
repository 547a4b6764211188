"""Tab/session management.

The TabManager owns the tabs and the active-tab pointer, and is the only
place a tab's result or execution time is written.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any

from query_workbench.core.logging import get_logger
from query_workbench.core.models import Tab

if TYPE_CHECKING:
    from collections.abc import Iterator

    from query_workbench.core.models import QueryResult

DEFAULT_TAB_NAME = "New Query"


class TabManager:
    """Ordered collection of tabs with exactly one active tab when non-empty."""

    def __init__(self, *, open_initial: bool = True) -> None:
        self._tabs: dict[str, Tab] = {}
        self._ids = itertools.count(1)
        self.active_id: str | None = None
        if open_initial:
            self.add_tab()

    def __len__(self) -> int:
        return len(self._tabs)

    def __iter__(self) -> Iterator[Tab]:
        return iter(list(self._tabs.values()))

    def __contains__(self, tab_id: object) -> bool:
        return tab_id in self._tabs

    @property
    def tabs(self) -> list[Tab]:
        return list(self._tabs.values())

    @property
    def active_tab(self) -> Tab | None:
        if self.active_id is None:
            return None
        return self._tabs.get(self.active_id)

    def get(self, tab_id: str) -> Tab | None:
        return self._tabs.get(tab_id)

    def add_tab(self, name: str = DEFAULT_TAB_NAME) -> Tab:
        tab = Tab(id=str(next(self._ids)), name=name)
        self._tabs[tab.id] = tab
        self.active_id = tab.id
        get_logger("tabs").debug("tab added", tab_id=tab.id)
        return tab

    def remove_tab(self, tab_id: str) -> None:
        if self._tabs.pop(tab_id, None) is None:
            return
        if self.active_id == tab_id:
            self.active_id = next(iter(self._tabs), None)
        get_logger("tabs").debug(
            "tab removed", tab_id=tab_id, active_id=self.active_id
        )

    def set_active(self, tab_id: str) -> None:
        """Switch the active tab. The id is not validated."""
        self.active_id = tab_id

    def _update(self, tab_id: str, **changes: Any) -> None:
        tab = self._tabs.get(tab_id)
        if tab is None:
            return
        self._tabs[tab_id] = tab.model_copy(update=changes)

    def rename_tab(self, tab_id: str, name: str) -> None:
        self._update(tab_id, name=name)

    def update_content(self, tab_id: str, content: str) -> None:
        self._update(tab_id, content=content)

    def update_result(
        self,
        tab_id: str,
        result: QueryResult,
        execution_time: float | None,
    ) -> None:
        """Store a new result and its execution time (milliseconds)."""
        self._update(tab_id, query_result=result, execution_time=execution_time)

    def replace_rows(self, tab_id: str, rows: list[list[Any]]) -> None:
        """Swap in reordered rows; columns are left as they are."""
        tab = self._tabs.get(tab_id)
        if tab is None or tab.query_result is None:
            return
        result = tab.query_result.model_copy(update={"rows": rows})
        self._update(tab_id, query_result=result)
