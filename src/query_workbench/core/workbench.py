"""Workbench session: tabs, execution, sorting and column layout together."""

from __future__ import annotations

from typing import TYPE_CHECKING

from query_workbench.core.execution import ExecutionController
from query_workbench.core.layout import ColumnLayout
from query_workbench.core.progress import ProgressSimulator
from query_workbench.core.sorting import SortEngine
from query_workbench.core.tabs import TabManager

if TYPE_CHECKING:
    from collections.abc import Callable

    from query_workbench.core.client import QueryServiceClient
    from query_workbench.core.config import ResolvedConfig
    from query_workbench.core.execution import ExecutionReport
    from query_workbench.core.models import SortConfig


class Workbench:
    def __init__(
        self,
        config: ResolvedConfig,
        client: QueryServiceClient,
        on_progress: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.tabs = TabManager()
        self.sorter = SortEngine(self.tabs)
        self.layout = ColumnLayout(config.column_width, config.min_column_width)
        self.progress = ProgressSimulator(
            interval=config.progress_interval,
            max_step=config.progress_max_step,
            on_change=on_progress,
        )
        self.controller = ExecutionController(
            self.tabs, client, self.sorter, progress=self.progress
        )

    @property
    def sort_config(self) -> SortConfig | None:
        return self.sorter.config

    @property
    def loading(self) -> bool:
        return self.controller.running

    async def run(
        self, selection: tuple[int, int] | None = None
    ) -> ExecutionReport | None:
        report = await self.controller.run_selected(selection)
        if report is not None:
            self.layout.ensure(len(report.result.columns))
        return report

    async def run_text(self, query: str) -> ExecutionReport | None:
        report = await self.controller.run(query)
        if report is not None:
            self.layout.ensure(len(report.result.columns))
        return report

    def sort(self, column_index: int) -> SortConfig | None:
        return self.sorter.sort(column_index)
