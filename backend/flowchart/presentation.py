"""
Presentation adapter: status filtering, connectors, bounds, pan/zoom, navigation.
Reads positions written by the layout pass and never writes them.
"""

from typing import Collection, Dict, List, Optional, Tuple

from .config import DEFAULT_CONFIG, FlowChartConfig
from .models import TaskNode

# Drawn box height; never taller than a layout row
BOX_H = 100
CHART_PADDING = 20

MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
ZOOM_FACTOR = 1.2
WHEEL_STEP = 0.1

STATUS_COLORS = {
    "To Do": "#6B7280",
    "In Progress": "#F59E0B",
    "Testing": "#8B5CF6",
    "Done": "#10B981",
    "Blocked": "#EF4444",
    "Review": "#3B82F6",
}
DEFAULT_STATUS_COLOR = "#6B7280"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def is_visible(node: TaskNode, visible_statuses: Optional[Collection[str]] = None) -> bool:
    """Empty or missing filter shows everything."""
    if not visible_statuses:
        return True
    return node.status in visible_statuses


def visible_nodes(root: Optional[TaskNode], visible_statuses: Optional[Collection[str]] = None) -> List[TaskNode]:
    """Visible nodes in pre-order. Descendants of hidden nodes are still considered."""
    if root is None:
        return []
    return [n for n in root.iter_nodes() if is_visible(n, visible_statuses)]


def box_size(config: FlowChartConfig = DEFAULT_CONFIG) -> Tuple[float, float]:
    """(width, height) of a drawn node box for the given layout units."""
    return config.node_width, min(BOX_H, config.node_height)


def connections(
    root: Optional[TaskNode],
    visible_statuses: Optional[Collection[str]] = None,
    config: FlowChartConfig = DEFAULT_CONFIG,
) -> List[Dict]:
    """
    Elbow connectors from a parent's bottom edge to each visible child's top edge.
    Returns [{from, to, points}] with points parent-bottom -> mid row -> child-top.
    Only descends through visible children.
    """
    out: List[Dict] = []
    _, box_h = box_size(config)
    if root is None or not is_visible(root, visible_statuses):
        return out

    def walk(node: TaskNode) -> None:
        for child in node.children:
            if not is_visible(child, visible_statuses):
                continue
            px, py = node.x, node.y + box_h
            cx, cy = child.x, child.y
            mid_y = py + (cy - py) / 2
            out.append({
                "from": node.id,
                "to": child.id,
                "points": [[px, py], [px, mid_y], [cx, mid_y], [cx, cy]],
            })
            walk(child)

    walk(root)
    return out


def chart_bounds(root: Optional[TaskNode], config: FlowChartConfig = DEFAULT_CONFIG) -> Optional[Dict[str, float]]:
    """View box covering every node box plus padding: {minX, minY, width, height}."""
    if root is None:
        return None
    box_w, box_h = box_size(config)
    nodes = list(root.iter_nodes())
    min_x = min(n.x - box_w / 2 for n in nodes)
    max_x = max(n.x + box_w / 2 for n in nodes)
    min_y = min(n.y for n in nodes)
    max_y = max(n.y + box_h for n in nodes)
    return {
        "minX": min_x - CHART_PADDING,
        "minY": min_y - CHART_PADDING,
        "width": max_x - min_x + CHART_PADDING * 2,
        "height": max_y - min_y + CHART_PADDING * 2,
    }


def find_node(root: Optional[TaskNode], task_id: str) -> Optional[TaskNode]:
    if root is None:
        return None
    return next((n for n in root.iter_nodes() if n.id == task_id), None)


def navigation_hash(root: Optional[TaskNode], task_id: str, project_id: Optional[str]) -> Optional[str]:
    """URL hash for a clicked node: '#<projectId>#<ticket>'. None if it cannot be resolved."""
    if not project_id:
        return None
    node = find_node(root, task_id)
    if node is None or not node.ticket:
        return None
    return f"#{project_id}#{node.ticket}"


def _clamp_zoom(value: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, value))


class ViewTransform:
    """Pan/zoom applied uniformly at render time. Node coordinates are untouched."""

    def __init__(self):
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.dragging = False
        self._drag_origin = (0.0, 0.0)

    def zoom_in(self) -> float:
        self.zoom = min(self.zoom * ZOOM_FACTOR, MAX_ZOOM)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = max(self.zoom / ZOOM_FACTOR, MIN_ZOOM)
        return self.zoom

    def wheel(self, delta_y: float) -> float:
        """Scroll down zooms out one step, anything else zooms in."""
        step = -WHEEL_STEP if delta_y > 0 else WHEEL_STEP
        self.zoom = _clamp_zoom(self.zoom + step)
        return self.zoom

    def reset(self) -> None:
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0

    def begin_drag(self, client_x: float, client_y: float) -> None:
        self.dragging = True
        self._drag_origin = (client_x - self.pan_x, client_y - self.pan_y)

    def drag_to(self, client_x: float, client_y: float) -> None:
        if not self.dragging:
            return
        self.pan_x = client_x - self._drag_origin[0]
        self.pan_y = client_y - self._drag_origin[1]

    def end_drag(self) -> None:
        self.dragging = False

    def to_dict(self) -> Dict[str, float]:
        return {"zoom": self.zoom, "panX": self.pan_x, "panY": self.pan_y}
