"""Schemas describing sync state and REST payloads."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class SyncStatus(BaseModel):
    """Read-only snapshot of the local session."""

    is_authenticated: bool = Field(..., description="Whether an access token is held.")
    account_email: Optional[str] = Field(
        None, description="Authenticated account, when it has been looked up."
    )
    last_sync: Optional[str] = Field(
        None, description="ISO-8601 timestamp of the last successful push."
    )
    file_id: Optional[str] = Field(None, description="Cached Drive file identifier.")


class AuthorizationResponse(BaseModel):
    """Consent URL returned when starting sign-in."""

    authorization_url: str
    state: str


class PullResponse(BaseModel):
    """Outcome of a pull."""

    status: Literal["ok", "no_data"]
    reason: Optional[str] = None
    document: Any = None


class PushResponse(BaseModel):
    """Outcome of a push."""

    status: Literal["synced"] = "synced"
    last_sync: Optional[str] = None


__all__ = ["AuthorizationResponse", "PullResponse", "PushResponse", "SyncStatus"]
