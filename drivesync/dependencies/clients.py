"""
Factory functions providing the shared sync session and services.
"""

import logging
import secrets
from functools import lru_cache

from drivesync.clients import (
    DriveRequestPipeline,
    GoogleDriveClient,
    OAuthStateEncoder,
    SQLiteStore,
)
from drivesync.core.config import get_settings
from drivesync.services import (
    DocumentSyncService,
    FileResolver,
    TokenManager,
    TokenStore,
)

logger = logging.getLogger(__name__)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_sqlite_store() -> SQLiteStore:
    """Provide the SQLite file holding local session state."""
    return SQLiteStore(_settings().sync.state_db_path)


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the process-wide sync session."""
    return TokenStore(get_sqlite_store())


@lru_cache()
def get_oauth_state_encoder() -> OAuthStateEncoder:
    """Provide an OAuth state encoder keyed by the configured secret."""
    settings = _settings()
    # Per-process key: pending consent flows do not survive a restart.
    secret = (
        settings.oauth.state_secret
        or settings.google.client_secret
        or secrets.token_hex(32)
    )
    return OAuthStateEncoder(secret_key=secret)


@lru_cache()
def get_token_manager() -> TokenManager:
    """Provide a token manager initialized from configuration."""
    settings = _settings()
    manager = TokenManager(
        get_token_store(),
        get_oauth_state_encoder(),
        settings.google,
        state_ttl_seconds=settings.oauth.state_ttl_seconds,
    )
    manager.initialize(
        settings.google.client_id,
        on_success=lambda _token: logger.info("Google Drive session established."),
    )
    return manager


@lru_cache()
def get_drive_client() -> GoogleDriveClient:
    """Provide Google Drive client instance."""
    pipeline = DriveRequestPipeline(
        get_token_store(),
        timeout=_settings().sync.request_timeout_seconds,
    )
    return GoogleDriveClient(pipeline)


@lru_cache()
def get_document_sync_service() -> DocumentSyncService:
    """Provide the coordinator used by every sync route."""
    settings = _settings()
    drive_client = get_drive_client()
    return DocumentSyncService(
        session=get_token_store(),
        token_manager=get_token_manager(),
        drive_client=drive_client,
        resolver=FileResolver(
            drive_client,
            get_token_store(),
            document_name=settings.sync.document_name,
        ),
    )


__all__ = [
    "get_document_sync_service",
    "get_drive_client",
    "get_oauth_state_encoder",
    "get_sqlite_store",
    "get_token_manager",
    "get_token_store",
]
