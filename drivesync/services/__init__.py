"""Service layer exports."""

from .document_sync import DocumentSyncService
from .file_resolver import FileResolver
from .token_manager import TokenManager
from .token_store import TokenStore

__all__ = [
    "DocumentSyncService",
    "FileResolver",
    "TokenManager",
    "TokenStore",
]
