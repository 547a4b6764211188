"""Query execution lifecycle.

One execution at a time for the whole workbench: IDLE -> RUNNING -> IDLE.
Transport and response-shape failures become a synthetic one-row error
result on the tab instead of propagating; empty query text raises
ValidationError before anything is sent.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import sentry_sdk

from query_workbench.core.exceptions import (
    MalformedResponse,
    TransportError,
    ValidationError,
    WorkbenchError,
)
from query_workbench.core.logging import get_logger
from query_workbench.core.normalizer import error_result, normalize_response
from query_workbench.core.progress import ProgressSimulator
from query_workbench.core.query_source import EMPTY_QUERY_MESSAGE, select_query_text

if TYPE_CHECKING:
    from collections.abc import Callable

    from query_workbench.core.client import QueryServiceClient
    from query_workbench.core.models import QueryResult
    from query_workbench.core.sorting import SortEngine
    from query_workbench.core.tabs import TabManager

FAILURE_MESSAGE = "Failed to execute query. Please try again."


class ExecutionState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class ExecutionOutcome(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ExecutionReport:
    tab_id: str
    query: str
    outcome: ExecutionOutcome
    execution_time: float
    result: QueryResult
    error: WorkbenchError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == ExecutionOutcome.SUCCESS


class ExecutionController:
    """Dispatches the active tab's query and records the outcome on the tab."""

    def __init__(
        self,
        tabs: TabManager,
        client: QueryServiceClient,
        sorter: SortEngine,
        *,
        progress: ProgressSimulator | None = None,
        clock: Callable[[], float] = time.monotonic,
        error_column_name: str = "",
    ) -> None:
        self.tabs = tabs
        self.client = client
        self.sorter = sorter
        self.progress = progress or ProgressSimulator()
        self.clock = clock
        self.error_column_name = error_column_name
        self.state = ExecutionState.IDLE

    @property
    def running(self) -> bool:
        return self.state == ExecutionState.RUNNING

    async def run_selected(
        self, selection: tuple[int, int] | None = None
    ) -> ExecutionReport | None:
        """Run the selected text of the active tab, or all of its statements."""
        if self.running:
            get_logger("execution").warning("execution already running, ignoring")
            return None
        tab = self.tabs.active_tab
        if tab is None:
            return None
        return await self.run(select_query_text(tab.content, selection))

    async def run(self, query: str) -> ExecutionReport | None:
        """Execute ``query`` for the active tab.

        Returns None when the submission is ignored (another execution is
        running, or there is no active tab). Raises ValidationError for
        blank query text.
        """
        log = get_logger("execution")
        if self.running:
            log.warning("execution already running, ignoring")
            return None
        tab = self.tabs.active_tab
        if tab is None:
            log.debug("no active tab, nothing to run")
            return None
        if not query.strip():
            raise ValidationError(EMPTY_QUERY_MESSAGE)

        tab_id = tab.id
        log = log.bind(tab_id=tab_id)
        self.state = ExecutionState.RUNNING
        start = self.clock()
        self.progress.start()
        log.debug("query started")
        try:
            error: WorkbenchError | None = None
            try:
                payload = await self.client.fetch_rows(query)
                result = normalize_response(payload)
                outcome = ExecutionOutcome.SUCCESS
            except (TransportError, MalformedResponse) as e:
                sentry_sdk.capture_exception(e)
                log.error("query failed", error=e.message)
                result = error_result(FAILURE_MESSAGE, self.error_column_name)
                outcome = ExecutionOutcome.FAILED
                error = e

            execution_time = max((self.clock() - start) * 1000, 0.0)
            self.tabs.update_result(tab_id, result, execution_time)
            self.sorter.reset()
            log.debug(
                "query complete",
                outcome=outcome.value,
                duration_ms=f"{execution_time:.1f}",
                row_count=result.row_count,
            )
            return ExecutionReport(
                tab_id=tab_id,
                query=query,
                outcome=outcome,
                execution_time=execution_time,
                result=result,
                error=error,
            )
        finally:
            await self.progress.stop()
            self.state = ExecutionState.IDLE
