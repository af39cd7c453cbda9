"""
Task flow chart backend - FastAPI entry point.
Serves task relationship trees (root resolution, bounded tree, layout) for a focus task.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import register_routes

app = FastAPI(title="Task Flow Chart Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app)


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
