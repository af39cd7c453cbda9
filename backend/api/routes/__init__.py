"""API route modules."""

from fastapi import FastAPI

from . import db, settings, tasks


def register_routes(app: FastAPI):
    """Register all API routers."""
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(db.router, prefix="/api/db", tags=["db"])
    app.include_router(settings.router, prefix="/api/settings", tags=["settings"])
