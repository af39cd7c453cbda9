"""Unit tests for root resolution."""

import pytest

from helpers import chain, parent_of, task

from flowchart.config import FlowChartConfig, ParentPolicy
from flowchart.root_resolver import pick_parent, resolve_root
from shared.graph import build_edge_index


def test_scenario_resolves_to_top(scenario_data):
    """Test D climbs to A."""
    index = build_edge_index(scenario_data["tasks"], scenario_data["relationships"])

    assert resolve_root(index, "D") == "A"


def test_task_without_parents_is_its_own_root(scenario_data):
    """Test a parentless focus is returned as is."""
    index = build_edge_index(scenario_data["tasks"], scenario_data["relationships"])

    assert resolve_root(index, "A") == "A"


@pytest.mark.parametrize("focus", ["A", "B", "C", "D", "E"])
def test_root_is_same_from_any_descendant(focus):
    """Test every task of an acyclic tree resolves to the same root."""
    tasks = [task(t) for t in "ABCDE"]
    rels = [parent_of("A", "B"), parent_of("A", "C"), parent_of("B", "D"), parent_of("D", "E")]
    index = build_edge_index(tasks, rels)

    assert resolve_root(index, focus) == "A"


def test_upward_cycle_stops_at_last_valid_task():
    """Test a parent cycle terminates and returns the last task before the revisit."""
    index = build_edge_index([task("A"), task("B")], [parent_of("A", "B"), parent_of("B", "A")])

    assert resolve_root(index, "A") == "B"
    assert resolve_root(index, "B") == "A"


def test_longer_cycle_terminates():
    """Test a three-task cycle terminates inside the cycle."""
    index = build_edge_index(
        [task("A"), task("B"), task("C")],
        [parent_of("A", "B"), parent_of("B", "C"), parent_of("C", "A")],
    )

    assert resolve_root(index, "A") in {"A", "B", "C"}


def test_max_ascent_cap():
    """Test the climb stops after max_ascent steps."""
    tasks, rels = chain(15)
    index = build_edge_index(tasks, rels)

    assert resolve_root(index, "n14", FlowChartConfig(max_ascent=10)) == "n4"
    assert resolve_root(index, "n14", FlowChartConfig(max_ascent=20)) == "n0"
    assert resolve_root(index, "n14", FlowChartConfig(max_ascent=0)) == "n14"


def test_unknown_focus_is_returned():
    """Test a focus id missing from the index is passed through."""
    assert resolve_root({}, "nope") == "nope"


def test_parent_policy():
    """Test lowest id vs first recorded parent."""
    index = build_edge_index(
        [task("P2"), task("P1"), task("X")],
        [parent_of("P2", "X"), parent_of("P1", "X")],
    )
    record = index["X"]

    assert record.parent_ids == ["P2", "P1"]
    assert pick_parent(record, ParentPolicy.LOWEST_ID) == "P1"
    assert pick_parent(record, ParentPolicy.FIRST_RECORDED) == "P2"
    assert resolve_root(index, "X") == "P1"
    assert resolve_root(index, "X", FlowChartConfig(parent_policy="first_recorded")) == "P2"
