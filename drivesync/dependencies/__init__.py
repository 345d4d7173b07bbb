"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_document_sync_service,
    get_drive_client,
    get_oauth_state_encoder,
    get_sqlite_store,
    get_token_manager,
    get_token_store,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_document_sync_service",
    "get_drive_client",
    "get_oauth_state_encoder",
    "get_sqlite_store",
    "get_token_manager",
    "get_token_store",
]
