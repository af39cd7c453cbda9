"""Pydantic models for flow chart data: fetch payload, materialized tree, result."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RelationshipKind(str, Enum):
    PARENT = "parent"
    CHILD = "child"


class RelationshipEdge(BaseModel):
    """One task_rels row. kind=parent: target is a child of source; kind=child: the inverse."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    id: Optional[Union[int, str]] = None
    source_task_id: str = Field(..., alias="taskId")
    kind: RelationshipKind = Field(..., alias="relationship")
    target_task_id: str = Field(..., alias="relatedTaskId")
    task_ticket: Optional[str] = Field(None, alias="taskTicket")
    related_task_ticket: Optional[str] = Field(None, alias="relatedTaskTicket")


class RawTaskRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    id: str
    ticket: Optional[str] = None
    title: Optional[str] = None
    member_id: Optional[str] = Field(None, alias="memberId")
    member_name: Optional[str] = Field(None, alias="memberName")
    member_color: Optional[str] = Field(None, alias="memberColor")
    start_date: Optional[str] = Field(None, alias="startDate")
    due_date: Optional[str] = Field(None, alias="dueDate")
    status: Optional[str] = None
    priority: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    # Populated by the edge index, in edge arrival order
    child_ids: List[str] = Field(default_factory=list, alias="childIds")
    parent_ids: List[str] = Field(default_factory=list, alias="parentIds")


class FlowChartData(BaseModel):
    """Result of fetching flow chart data for a focus task."""
    model_config = ConfigDict(populate_by_name=True)
    root_task_id: Optional[str] = Field(None, alias="rootTaskId")
    tasks: List[RawTaskRecord] = Field(default_factory=list)
    relationships: List[RelationshipEdge] = Field(default_factory=list)


class TaskNode(BaseModel):
    """Materialized tree node. x/y stay None until the layout pass writes them."""
    model_config = ConfigDict(populate_by_name=True)
    id: str
    ticket: str
    title: str
    member_id: str = Field("", alias="memberId")
    member_name: str = Field("Unknown", alias="memberName")
    member_color: str = Field("#6366F1", alias="memberColor")
    start_date: str = Field("", alias="startDate")
    due_date: str = Field("", alias="dueDate")
    status: str = "Unknown"
    priority: str = "medium"
    project_id: str = Field("", alias="projectId")
    level: int = 0
    children: List["TaskNode"] = Field(default_factory=list)
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def from_record(cls, record: RawTaskRecord, level: int) -> "TaskNode":
        return cls(
            id=record.id,
            ticket=record.ticket or f"TASK-{record.id[-5:]}",
            title=record.title or "Unknown Task",
            member_id=record.member_id or "",
            member_name=record.member_name or "Unknown",
            member_color=record.member_color or "#6366F1",
            start_date=record.start_date or "",
            due_date=record.due_date or "",
            status=record.status or "Unknown",
            priority=record.priority or "medium",
            project_id=record.project_id or "",
            level=level,
        )

    def iter_nodes(self):
        """Pre-order walk over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()


class FlowChartResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    focus_task_id: str = Field(..., alias="focusTaskId")
    root_task_id: Optional[str] = Field(None, alias="rootTaskId")
    tree: Optional[TaskNode] = None
    available_statuses: List[str] = Field(default_factory=list, alias="availableStatuses")
    node_count: int = Field(0, alias="nodeCount")


TaskNode.model_rebuild()
