"""
Tree builder: materialize a bounded, cycle-free TaskNode tree from the edge index.
Depth, total node count and per-node fan-out are capped independently.
"""

from typing import Dict, Optional, Set

from loguru import logger

from .config import DEFAULT_CONFIG, FlowChartConfig
from .models import RawTaskRecord, TaskNode


class BuildContext:
    """Per-build state threaded through the recursion. One per build call."""

    def __init__(self, index: Dict[str, RawTaskRecord], config: FlowChartConfig):
        self.index = index
        self.config = config
        self.visited: Set[str] = set()
        self.node_count = 0

    def build_node(self, task_id: str, level: int = 0) -> Optional[TaskNode]:
        cfg = self.config
        if level > cfg.max_depth:
            logger.warning("Max depth ({}) reached for task {}", cfg.max_depth, task_id)
            return None
        if self.node_count >= cfg.max_nodes:
            logger.warning("Max nodes ({}) reached, skipping task {}", cfg.max_nodes, task_id)
            return None
        if task_id in self.visited:
            logger.warning("Circular reference detected for task {} at level {}", task_id, level)
            return None

        self.visited.add(task_id)
        self.node_count += 1

        record = self.index.get(task_id)
        if record is None:
            logger.warning("No data found for task {}", task_id)
            return None

        node = TaskNode.from_record(record, level)
        child_ids = record.child_ids
        if len(child_ids) > cfg.max_children:
            logger.debug("Task {} has {} children, keeping first {}", record.ticket or task_id, len(child_ids), cfg.max_children)
            child_ids = child_ids[: cfg.max_children]
        for child_id in child_ids:
            child = self.build_node(child_id, level + 1)
            if child is not None:
                node.children.append(child)
        return node


def build_tree(
    index: Dict[str, RawTaskRecord],
    root_id: str,
    config: FlowChartConfig = DEFAULT_CONFIG,
) -> Optional[TaskNode]:
    """Build the tree rooted at root_id. None when root_id has no record."""
    ctx = BuildContext(index, config)
    tree = ctx.build_node(root_id)
    logger.debug("Hierarchy built from {} with {} nodes", root_id, ctx.node_count)
    return tree
