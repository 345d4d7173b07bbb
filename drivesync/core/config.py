"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app and the command-line tool
share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)


class GoogleSettings(BaseSettings):
    """Configuration required for the Google consent flow."""

    model_config = _ENV_CONFIG

    client_id: Optional[str] = Field(None, alias="GOOGLE_CLIENT_ID")
    client_secret: Optional[str] = Field(None, alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: AnyHttpUrl = Field(
        "http://localhost:8000/api/auth/google/callback",
        alias="GOOGLE_REDIRECT_URI",
    )


class OAuthSettings(BaseSettings):
    """OAuth flow configuration."""

    model_config = _ENV_CONFIG

    state_ttl_seconds: int = Field(900, alias="OAUTH_STATE_TTL")
    state_secret: Optional[str] = Field(
        None,
        alias="OAUTH_STATE_SECRET",
        description="Key used to sign OAuth state values. Falls back to the client secret.",
    )


class SyncSettings(BaseSettings):
    """Settings for the remote document and local session state."""

    model_config = _ENV_CONFIG

    document_name: str = Field(
        "crafted_habitat_master_db.json", alias="DRIVE_SYNC_DOCUMENT_NAME"
    )
    state_db_path: str = Field(".data/drivesync.sqlite3", alias="DRIVE_SYNC_STATE_DB")
    request_timeout_seconds: float = Field(30.0, alias="DRIVE_SYNC_REQUEST_TIMEOUT")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = _ENV_CONFIG

    environment: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    frontend_base_url: Optional[HttpUrl] = Field(
        None,
        alias="FRONTEND_BASE_URL",
        description="Optional URL for redirecting users back to the front-end.",
    )
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SyncSettings",
    "get_settings",
]
