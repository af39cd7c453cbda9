"""
Flow chart module - task relationship tree for a focus task.
Models and config live here; pipeline, presentation and session are imported
from their submodules (layout depends on this package).

Server side, api.routes.tasks calls pipeline.build_flow_chart per request.
Client side, session.FlowChartSession is the entry point: it owns the fetch for
the current focus task, discards stale responses and keeps filter and pan/zoom state.
"""

from .config import DEFAULT_CONFIG, FlowChartConfig, ParentPolicy
from .models import (
    FlowChartData,
    FlowChartResult,
    RawTaskRecord,
    RelationshipEdge,
    RelationshipKind,
    TaskNode,
)

__all__ = [
    "DEFAULT_CONFIG",
    "FlowChartConfig",
    "FlowChartData",
    "FlowChartResult",
    "ParentPolicy",
    "RawTaskRecord",
    "RelationshipEdge",
    "RelationshipKind",
    "TaskNode",
]
