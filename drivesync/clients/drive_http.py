"""Authenticated request pipeline for Google Drive calls."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, TYPE_CHECKING

import httpx

from drivesync.core.errors import (
    NetworkError,
    RemoteAPIError,
    RequestTimeoutError,
    SessionExpiredError,
    UnauthenticatedError,
)

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from drivesync.services.token_store import TokenStore

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a Google error body when there is one."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"{response.status_code} request failed"


class DriveRequestPipeline:
    """Issue every Drive call with the session's bearer token.

    No retries happen here. A 401 clears the session before raising so the
    caller is forced back through sign-in.
    """

    def __init__(
        self,
        session: "TokenStore",
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._transport = transport

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        content: bytes | None = None,
        json: Any = None,
    ) -> httpx.Response:
        token = self._session.access_token
        if not token:
            raise UnauthenticatedError()

        request_headers = dict(headers or {})
        request_headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    headers=request_headers,
                    content=content,
                    json=json,
                )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"{method} {url} timed out after {self._timeout:g}s"
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.warning("Drive rejected the access token; signing out.")
            self._session.clear()
            raise SessionExpiredError()

        if not response.is_success:
            message = _error_message(response)
            logger.error("Drive %s %s failed: %s", method, url, message)
            raise RemoteAPIError(message, status_code=response.status_code)

        return response


__all__ = ["DriveRequestPipeline"]
