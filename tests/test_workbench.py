"""Tests for the Workbench session facade."""

import pytest

from query_workbench.core.workbench import Workbench


@pytest.mark.unit
async def test_run_updates_tab_and_layout(config, client, service):
    service.result = [["a", "b"], [2, "x"], [1, "y"]]
    progress = []
    workbench = Workbench(config, client, on_progress=progress.append)
    tab_id = workbench.tabs.active_id
    workbench.tabs.update_content(tab_id, "SELECT a, b FROM t;")

    report = await workbench.run()

    assert report.ok
    assert service.queries == ["SELECT a, b FROM t"]
    assert workbench.layout.widths == [config.column_width] * 2
    assert progress[-1] == 100.0
    assert not workbench.loading


@pytest.mark.unit
async def test_sort_goes_through_active_tab(config, client, service):
    service.result = [["n"], [3], [1], [2]]
    workbench = Workbench(config, client)
    await workbench.run_text("SELECT n")

    workbench.sort(0)
    assert workbench.tabs.active_tab.query_result.rows == [[1], [2], [3]]
    assert workbench.sort_config.column_index == 0
    workbench.sort(0)
    assert workbench.tabs.active_tab.query_result.rows == [[3], [2], [1]]
