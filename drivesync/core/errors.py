"""Exceptions raised by the sync core.

Every failure that crosses a layer boundary is a ``DriveSyncError`` subclass.
Each carries a short machine-readable ``code`` that the REST layer and the
CLI use to decide how to report it. An empty or unreadable remote document is
not an error; see ``drivesync.models.document.NoData``.
"""

from __future__ import annotations

from typing import Optional


class DriveSyncError(Exception):
    """Base exception for all drivesync errors.

    Attributes:
        message: Human-readable error description.
    """

    code = "sync_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(DriveSyncError):
    """Raised when an authenticated call is attempted without a token."""

    code = "unauthenticated"

    def __init__(self, message: str = "Unauthorized: please sign in with Google.") -> None:
        super().__init__(message)


class SessionExpiredError(DriveSyncError):
    """Raised after a 401; the local session has already been cleared."""

    code = "session_expired"

    def __init__(self, message: str = "Session expired. Please sign in again.") -> None:
        super().__init__(message)


class ConfigurationError(DriveSyncError):
    """Raised when the consent flow client was never initialized."""

    code = "configuration_error"


class ConsentFlowError(DriveSyncError):
    """Raised when the interactive consent flow fails or is rejected."""

    code = "consent_failed"


class RemoteAPIError(DriveSyncError):
    """Raised for any non-2xx, non-401 response from the provider.

    Attributes:
        status_code: HTTP status returned by the provider.
    """

    code = "remote_api_error"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RequestTimeoutError(DriveSyncError):
    """Raised when a request exceeds the configured deadline."""

    code = "timeout"


class NetworkError(DriveSyncError):
    """Raised when the transport fails before a response is received."""

    code = "network_error"


__all__ = [
    "ConfigurationError",
    "ConsentFlowError",
    "DriveSyncError",
    "NetworkError",
    "RemoteAPIError",
    "RequestTimeoutError",
    "SessionExpiredError",
    "UnauthenticatedError",
]
