"""
Flow chart pipeline: fetch result -> edge index -> root -> tree -> layout.
Pure and synchronous; each call produces a fresh tree.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger

from layout import compute_flowchart_layout
from shared.graph import build_edge_index

from .config import DEFAULT_CONFIG, FlowChartConfig
from .models import FlowChartData, FlowChartResult, RawTaskRecord
from .root_resolver import resolve_root
from .tree_builder import build_tree


def available_statuses(records: Iterable[RawTaskRecord]) -> List[str]:
    """Distinct non-empty statuses across all fetched records, sorted."""
    return sorted({r.status for r in records if r.status})


def build_flow_chart(
    data: Optional[Union[FlowChartData, Dict[str, Any]]],
    focus_id: str,
    config: FlowChartConfig = DEFAULT_CONFIG,
) -> FlowChartResult:
    """
    Build and lay out the tree containing focus_id.
    An empty fetch, or a root with no record, yields tree=None (the "no related tasks" state).
    """
    if isinstance(data, dict):
        tasks, relationships = data.get("tasks"), data.get("relationships")
    elif data is not None:
        tasks, relationships = data.tasks, data.relationships
    else:
        tasks, relationships = [], []

    index = build_edge_index(tasks, relationships)
    result = FlowChartResult(
        focus_task_id=focus_id,
        available_statuses=available_statuses(index.values()),
    )
    if not index:
        logger.info("No tasks found for flow chart of {}", focus_id)
        return result

    root_id = resolve_root(index, focus_id, config)
    tree = build_tree(index, root_id, config)
    if tree is None:
        logger.info("Flow chart root {} has no task data", root_id)
        return result

    compute_flowchart_layout(tree, config)
    result.root_task_id = root_id
    result.tree = tree
    result.node_count = sum(1 for _ in tree.iter_nodes())
    logger.info(
        "Flow chart for {} built from root {} with {} nodes",
        focus_id, root_id, result.node_count,
    )
    return result
