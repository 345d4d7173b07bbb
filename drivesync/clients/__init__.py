"""Expose constructed client wrappers."""

from .drive_http import DriveRequestPipeline
from .google_auth import GoogleOAuthClient, OAuthStateEncoder
from .google_drive import GoogleDriveClient
from .sqlite_store import SQLiteStore

__all__ = [
    "DriveRequestPipeline",
    "GoogleDriveClient",
    "GoogleOAuthClient",
    "OAuthStateEncoder",
    "SQLiteStore",
]
