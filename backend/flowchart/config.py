"""Flow chart configuration: traversal bounds and layout units."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ParentPolicy(str, Enum):
    """Which parent the root resolver follows when a task has several."""
    LOWEST_ID = "lowest_id"
    FIRST_RECORDED = "first_recorded"


class FlowChartConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    max_depth: int = Field(10, ge=0, alias="maxDepth")
    max_nodes: int = Field(50, ge=0, alias="maxNodes")
    max_children: int = Field(10, ge=0, alias="maxChildren")
    max_ascent: int = Field(10, ge=0, alias="maxAscent")
    parent_policy: ParentPolicy = Field(ParentPolicy.LOWEST_ID, alias="parentPolicy")

    node_width: float = Field(200, gt=0, alias="nodeWidth")
    node_height: float = Field(120, gt=0, alias="nodeHeight")
    horizontal_spacing: float = Field(80, ge=0, alias="horizontalSpacing")
    vertical_spacing: float = Field(180, ge=0, alias="verticalSpacing")
    origin_x: float = Field(400, alias="originX")
    origin_y: float = Field(50, alias="originY")


DEFAULT_CONFIG = FlowChartConfig()
