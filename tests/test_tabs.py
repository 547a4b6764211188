"""Tests for tab/session management."""

import itertools

import pytest

from query_workbench.core.models import Column, QueryResult
from query_workbench.core.tabs import DEFAULT_TAB_NAME, TabManager


@pytest.mark.unit
def test_starts_with_one_active_tab():
    tabs = TabManager()
    assert len(tabs) == 1
    assert tabs.active_tab.name == DEFAULT_TAB_NAME
    assert tabs.active_tab.content == ""


@pytest.mark.unit
def test_can_start_empty():
    tabs = TabManager(open_initial=False)
    assert len(tabs) == 0
    assert tabs.active_tab is None


@pytest.mark.unit
def test_add_tab_becomes_active():
    tabs = TabManager()
    tab = tabs.add_tab()
    assert tabs.active_id == tab.id
    assert tab.name == "New Query"
    assert tab.query_result is None
    assert [t.id for t in tabs] == ["1", tab.id]


@pytest.mark.unit
def test_ids_are_never_reused():
    tabs = TabManager()
    first = tabs.active_id
    tabs.remove_tab(first)
    tab = tabs.add_tab()
    assert tab.id != first


@pytest.mark.unit
def test_remove_absent_tab_is_noop():
    tabs = TabManager()
    tabs.remove_tab("nope")
    assert len(tabs) == 1


@pytest.mark.unit
def test_remove_inactive_keeps_active():
    tabs = TabManager()
    first = tabs.active_id
    second = tabs.add_tab().id
    tabs.remove_tab(first)
    assert tabs.active_id == second


@pytest.mark.unit
def test_remove_active_falls_back_to_first_remaining():
    tabs = TabManager()
    first = tabs.active_id
    tabs.add_tab()
    third = tabs.add_tab().id
    tabs.remove_tab(third)
    assert tabs.active_id == first


@pytest.mark.unit
def test_remove_last_tab_clears_active():
    tabs = TabManager()
    tabs.remove_tab(tabs.active_id)
    assert tabs.active_id is None
    assert tabs.active_tab is None


@pytest.mark.unit
@pytest.mark.parametrize("order", list(itertools.permutations(range(4))))
def test_active_pointer_valid_for_any_removal_order(order):
    tabs = TabManager()
    ids = [tabs.active_id] + [tabs.add_tab().id for _ in range(3)]
    for step, position in enumerate(order):
        if step % 2 == 0:
            tabs.set_active(ids[position])
        tabs.remove_tab(ids[position])
        if len(tabs):
            assert tabs.active_id in tabs
        else:
            assert tabs.active_id is None


@pytest.mark.unit
def test_rename_and_update_content():
    tabs = TabManager()
    tab_id = tabs.active_id
    tabs.rename_tab(tab_id, "containers")
    tabs.update_content(tab_id, "SELECT 1")
    tab = tabs.get(tab_id)
    assert tab.name == "containers"
    assert tab.content == "SELECT 1"


@pytest.mark.unit
def test_updates_to_absent_tab_are_noops():
    tabs = TabManager()
    tabs.rename_tab("missing", "x")
    tabs.update_content("missing", "x")
    tabs.update_result("missing", QueryResult(columns=[], rows=[]), 1.0)
    assert tabs.get("missing") is None


@pytest.mark.unit
def test_set_active_does_not_validate():
    tabs = TabManager()
    tabs.set_active("ghost")
    assert tabs.active_id == "ghost"
    assert tabs.active_tab is None


@pytest.mark.unit
def test_update_result_and_replace_rows():
    tabs = TabManager()
    tab_id = tabs.active_id
    result = QueryResult(columns=[Column(name="n")], rows=[[2], [1]])
    tabs.update_result(tab_id, result, 12.5)
    assert tabs.get(tab_id).execution_time == 12.5

    tabs.replace_rows(tab_id, [[1], [2]])
    assert tabs.get(tab_id).query_result.rows == [[1], [2]]
    assert tabs.get(tab_id).query_result.columns == [Column(name="n")]
    assert result.rows == [[2], [1]]
