"""Public schema exports."""

from .sync import AuthorizationResponse, PullResponse, PushResponse, SyncStatus

__all__ = [
    "AuthorizationResponse",
    "PullResponse",
    "PushResponse",
    "SyncStatus",
]
