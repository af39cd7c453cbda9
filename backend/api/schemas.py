"""Pydantic request/response schemas for API."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from flowchart.models import TaskNode


class DatasetImportRequest(BaseModel):
    """Replace stored tasks and relationships (wire format, camelCase)."""
    model_config = ConfigDict(populate_by_name=True)
    tasks: List[dict] = Field(default_factory=list)
    relationships: List[dict] = Field(default_factory=list)


class FlowChartLayoutResponse(BaseModel):
    """Positioned tree plus what the client needs to draw and filter it."""
    model_config = ConfigDict(populate_by_name=True)
    focus_task_id: str = Field(..., alias="focusTaskId")
    root_task_id: Optional[str] = Field(None, alias="rootTaskId")
    tree: Optional[TaskNode] = None
    available_statuses: List[str] = Field(default_factory=list, alias="availableStatuses")
    visible_task_ids: List[str] = Field(default_factory=list, alias="visibleTaskIds")
    connections: List[dict] = Field(default_factory=list)
    bounds: Optional[Dict[str, float]] = None
    box: Optional[Dict[str, float]] = None
