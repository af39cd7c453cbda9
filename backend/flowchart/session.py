"""
Flow chart session: one open chart, reloaded whenever the focus task changes.
Last request wins: a fetch that returns after the focus moved on is discarded.
"""

from typing import Any, Awaitable, Callable, List, Optional, Set

from loguru import logger

from .config import DEFAULT_CONFIG, FlowChartConfig
from .models import FlowChartResult, TaskNode
from .pipeline import build_flow_chart
from .presentation import ViewTransform, visible_nodes

FetchFlowChart = Callable[[str], Awaitable[Any]]

LOAD_ERROR = "Failed to load task relationships"


class FlowChartSession:
    def __init__(self, fetch: FetchFlowChart, config: FlowChartConfig = DEFAULT_CONFIG):
        self._fetch = fetch
        self.config = config
        self.focus_task_id: Optional[str] = None
        self.loading = False
        self.error: Optional[str] = None
        self.result: Optional[FlowChartResult] = None
        self.selected_statuses: Set[str] = set()
        self.view = ViewTransform()
        self._generation = 0

    @property
    def tree(self) -> Optional[TaskNode]:
        return self.result.tree if self.result else None

    @property
    def empty(self) -> bool:
        """Loaded without error but nothing to draw."""
        return self.result is not None and self.result.tree is None

    @property
    def available_statuses(self) -> List[str]:
        return self.result.available_statuses if self.result else []

    def _is_current(self, generation: int, focus_id: str) -> bool:
        return generation == self._generation and focus_id == self.focus_task_id

    async def load(self, focus_id: str) -> Optional[FlowChartResult]:
        """Fetch and build the chart for focus_id. Returns None if failed or superseded."""
        if not focus_id:
            logger.debug("Flow chart load skipped: no focus task id")
            return None

        self._generation += 1
        generation = self._generation
        self.focus_task_id = focus_id
        self.loading = True
        self.error = None

        try:
            data = await self._fetch(focus_id)
        except Exception as e:
            if not self._is_current(generation, focus_id):
                logger.debug("Ignoring failed stale fetch for {}: {}", focus_id, e)
                return None
            logger.warning("Error fetching flow chart data for {}: {}", focus_id, e)
            self.error = LOAD_ERROR
            self.result = None
            self.loading = False
            return None

        if not self._is_current(generation, focus_id):
            logger.debug("Discarding stale flow chart response for {} (focus is now {})", focus_id, self.focus_task_id)
            return None

        result = build_flow_chart(data, focus_id, self.config)
        self.result = result
        self.loading = False
        return result

    def toggle_status(self, status: str) -> None:
        if status in self.selected_statuses:
            self.selected_statuses.discard(status)
        else:
            self.selected_statuses.add(status)

    def clear_status_filter(self) -> None:
        self.selected_statuses.clear()

    def visible_nodes(self) -> List[TaskNode]:
        return visible_nodes(self.tree, self.selected_statuses)
