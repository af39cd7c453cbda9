"""Settings API routes. Backend maintains settings.json; frontend fetches and overwrites on save."""

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from db import get_flow_chart_config, get_settings, save_settings
from flowchart.config import FlowChartConfig

router = APIRouter()


@router.get("")
async def get_settings_route():
    """Return settings.json contents and the effective flow chart config."""
    settings = await get_settings()
    config = await get_flow_chart_config()
    return {"settings": settings, "flowChart": config.model_dump(by_alias=True, mode="json")}


@router.post("")
async def save_settings_route(body: dict = Body(...)):
    """Overwrite settings.json with request body. flowChart section is validated first."""
    section = body.get("flowChart")
    if section is not None:
        try:
            FlowChartConfig.model_validate(section)
        except ValidationError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
    await save_settings(body)
    return {"success": True}
