"""
Subtree-width tree layout for the task flow chart.
Each node is centered over the horizontal span its subtree needs, so sibling
subtrees never overlap. Depth moves y down by one rank per level.

x is the node's horizontal center, y its top edge.
"""

from typing import Optional

from flowchart.config import DEFAULT_CONFIG, FlowChartConfig
from flowchart.models import TaskNode

DEFAULT_NODE_W = DEFAULT_CONFIG.node_width
DEFAULT_NODE_H = DEFAULT_CONFIG.node_height
DEFAULT_NODE_SEP = DEFAULT_CONFIG.horizontal_spacing   # gap between sibling subtrees
DEFAULT_RANK_SEP = DEFAULT_CONFIG.vertical_spacing     # gap between parent and child rows


def subtree_width(
    node: TaskNode,
    node_w: float = DEFAULT_NODE_W,
    node_sep: float = DEFAULT_NODE_SEP,
) -> float:
    """Horizontal span needed by node and all its descendants."""
    if not node.children:
        return node_w
    total = sum(subtree_width(c, node_w, node_sep) for c in node.children)
    total += (len(node.children) - 1) * node_sep
    return max(node_w, total)


def place_subtree(
    node: TaskNode,
    x: float,
    y: float,
    node_w: float = DEFAULT_NODE_W,
    node_h: float = DEFAULT_NODE_H,
    node_sep: float = DEFAULT_NODE_SEP,
    rank_sep: float = DEFAULT_RANK_SEP,
) -> None:
    """Write x/y for node, then lay children left to right under it."""
    node.x = x
    node.y = y
    if not node.children:
        return

    cursor = x - subtree_width(node, node_w, node_sep) / 2
    child_y = y + node_h + rank_sep
    for child in node.children:
        child_w = subtree_width(child, node_w, node_sep)
        place_subtree(child, cursor + child_w / 2, child_y, node_w, node_h, node_sep, rank_sep)
        cursor += child_w + node_sep


def compute_flowchart_layout(
    root: Optional[TaskNode],
    config: FlowChartConfig = DEFAULT_CONFIG,
) -> Optional[TaskNode]:
    """Position every node of an already built tree. Returns the same root (or None)."""
    if root is None:
        return None
    place_subtree(
        root,
        config.origin_x,
        config.origin_y,
        node_w=config.node_width,
        node_h=config.node_height,
        node_sep=config.horizontal_spacing,
        rank_sep=config.vertical_spacing,
    )
    return root
