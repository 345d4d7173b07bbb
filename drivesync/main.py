"""
FastAPI application entrypoint for the Drive document sync service.
"""

from __future__ import annotations

from fastapi import FastAPI

from drivesync.api.errors import register_error_handlers
from drivesync.api.routes import router as api_router
from drivesync.core.config import get_settings
from drivesync.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Drive Document Sync",
        version="0.1.0",
        description="Pull and push a whole-application JSON snapshot stored on Google Drive.",
    )
    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
