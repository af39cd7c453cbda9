"""Task flow chart API - raw data and positioned tree."""

from typing import List

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from loguru import logger

from db import get_flow_chart_config, get_flow_chart_data
from flowchart.pipeline import build_flow_chart
from flowchart.presentation import box_size, chart_bounds, connections, visible_nodes

from ..schemas import FlowChartLayoutResponse

router = APIRouter()


async def _load(task_id: str):
    """Return (data, error_response). One of them is None."""
    try:
        data = await get_flow_chart_data(task_id)
    except ValueError as e:
        return None, JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Error getting flow chart data for {}", task_id)
        return None, JSONResponse(status_code=500, content={"error": "Failed to get flow chart data"})
    if data is None:
        return None, JSONResponse(status_code=404, content={"error": "Task not found"})
    return data, None


@router.get("/{task_id}/flow-chart")
async def get_flow_chart(task_id: str):
    """Connected tasks and relationships for the focus task."""
    data, error = await _load(task_id)
    if error:
        return error
    return data


@router.get("/{task_id}/flow-chart/layout")
async def get_flow_chart_layout(task_id: str, status: List[str] = Query(default=[])):
    """Build, lay out and filter the flow chart tree. ?status=... may repeat; none = all."""
    data, error = await _load(task_id)
    if error:
        return error
    config = await get_flow_chart_config()
    result = build_flow_chart(data, task_id, config)
    statuses = set(status)
    box_w, box_h = box_size(config)
    response = FlowChartLayoutResponse(
        focus_task_id=task_id,
        root_task_id=result.root_task_id,
        tree=result.tree,
        available_statuses=result.available_statuses,
        visible_task_ids=[n.id for n in visible_nodes(result.tree, statuses)],
        connections=connections(result.tree, statuses, config),
        bounds=chart_bounds(result.tree, config),
        box={"width": box_w, "height": box_h},
    )
    return response.model_dump(by_alias=True)
