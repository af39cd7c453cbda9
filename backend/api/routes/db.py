"""DB API routes."""

from fastapi import APIRouter

from db import clear_db, import_dataset

from ..schemas import DatasetImportRequest

router = APIRouter()


@router.post("/import")
async def import_data(body: DatasetImportRequest):
    """Replace stored tasks and relationships."""
    return await import_dataset(body.tasks, body.relationships)


@router.post("/clear")
async def clear():
    """Clear DB: remove stored tasks and relationships."""
    return await clear_db()
