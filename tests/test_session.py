"""Tests for the flow chart session and its stale-response guard."""

import asyncio

import pytest

from flowchart.session import LOAD_ERROR, FlowChartSession


def _fetcher(data):
    async def fetch(task_id):
        return data
    return fetch


@pytest.mark.asyncio
async def test_load_builds_tree(scenario_data):
    """Test a successful load exposes the positioned tree."""
    session = FlowChartSession(_fetcher(scenario_data))

    result = await session.load("D")

    assert result is session.result
    assert session.tree.id == "A"
    assert session.loading is False
    assert session.error is None
    assert session.empty is False
    assert session.available_statuses == ["Done", "In Progress", "To Do"]


@pytest.mark.asyncio
async def test_fetch_failure_sets_error(scenario_data):
    """Test a failing fetch becomes an error state with no tree."""
    session = FlowChartSession(_fetcher(scenario_data))
    await session.load("A")

    async def broken(task_id):
        raise RuntimeError("connection reset")

    session._fetch = broken
    result = await session.load("B")

    assert result is None
    assert session.error == LOAD_ERROR
    assert session.tree is None
    assert session.loading is False


@pytest.mark.asyncio
async def test_empty_result_is_not_an_error():
    """Test zero related tasks is the empty state."""
    session = FlowChartSession(_fetcher({"tasks": [], "relationships": []}))

    await session.load("A")

    assert session.empty is True
    assert session.error is None
    assert session.available_statuses == []


@pytest.mark.asyncio
async def test_blank_focus_is_skipped(scenario_data):
    """Test no focus id means no fetch."""
    calls = []

    async def fetch(task_id):
        calls.append(task_id)
        return scenario_data

    session = FlowChartSession(fetch)

    assert await session.load("") is None
    assert calls == []


@pytest.mark.asyncio
async def test_stale_response_discarded(scenario_data):
    """Test a slow response for an old focus does not overwrite the newer one."""
    gate = asyncio.Event()
    other = {"tasks": [{"id": "X", "status": "Blocked"}], "relationships": []}

    async def fetch(task_id):
        if task_id == "X":
            await gate.wait()
            return other
        return scenario_data

    session = FlowChartSession(fetch)
    slow = asyncio.create_task(session.load("X"))
    await asyncio.sleep(0)

    fresh = await session.load("D")
    gate.set()
    stale = await slow

    assert stale is None
    assert fresh is session.result
    assert session.focus_task_id == "D"
    assert session.tree.id == "A"


@pytest.mark.asyncio
async def test_stale_failure_ignored(scenario_data):
    """Test an old request failing after a newer one succeeded leaves no error."""
    gate = asyncio.Event()

    async def fetch(task_id):
        if task_id == "X":
            await gate.wait()
            raise RuntimeError("late failure")
        return scenario_data

    session = FlowChartSession(fetch)
    slow = asyncio.create_task(session.load("X"))
    await asyncio.sleep(0)
    await session.load("A")
    gate.set()

    assert await slow is None
    assert session.error is None
    assert session.tree.id == "A"


@pytest.mark.asyncio
async def test_status_toggle_keeps_layout(scenario_data):
    """Test toggling statuses changes visibility only."""
    session = FlowChartSession(_fetcher(scenario_data))
    await session.load("A")
    before = [(n.x, n.y) for n in session.tree.iter_nodes()]

    session.toggle_status("Done")
    assert [n.id for n in session.visible_nodes()] == ["D", "C"]
    session.toggle_status("Done")
    assert session.selected_statuses == set()
    session.toggle_status("To Do")
    session.clear_status_filter()
    assert len(session.visible_nodes()) == 4

    assert [(n.x, n.y) for n in session.tree.iter_nodes()] == before
