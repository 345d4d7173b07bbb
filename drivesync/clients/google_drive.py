"""Google Drive REST endpoints used by the sync core."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from drivesync.clients.drive_http import DriveRequestPipeline
from drivesync.core.errors import RemoteAPIError

JSON_MIME_TYPE = "application/json"


def _quote_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise RemoteAPIError(
            f"{response.status_code} response was not valid JSON",
            status_code=response.status_code,
        ) from exc
    if not isinstance(body, dict):
        raise RemoteAPIError(
            f"{response.status_code} response was not a JSON object",
            status_code=response.status_code,
        )
    return body


class GoogleDriveClient:
    """Drive v3 calls routed through the authenticated pipeline."""

    API_BASE_URL = "https://www.googleapis.com/drive/v3"
    UPLOAD_BASE_URL = "https://www.googleapis.com/upload/drive/v3"

    def __init__(self, pipeline: DriveRequestPipeline) -> None:
        self._pipeline = pipeline

    async def search_files(self, name: str) -> List[Dict[str, str]]:
        """Return non-trashed files named exactly ``name``, oldest first."""
        response = await self._pipeline.request(
            "GET",
            f"{self.API_BASE_URL}/files",
            params={
                "q": f"name = '{_quote_query_value(name)}' and trashed = false",
                "fields": "files(id, createdTime)",
                "orderBy": "createdTime",
                "spaces": "drive",
            },
        )
        return list(_json_body(response).get("files") or [])

    async def create_file(self, name: str) -> str:
        """Create an empty JSON file and return its identifier."""
        response = await self._pipeline.request(
            "POST",
            f"{self.API_BASE_URL}/files",
            params={"fields": "id"},
            json={"name": name, "mimeType": JSON_MIME_TYPE},
        )
        file_id = _json_body(response).get("id")
        if not file_id:
            raise RemoteAPIError(
                "Drive did not return an id for the created file.",
                status_code=response.status_code,
            )
        return file_id

    async def download_content(self, file_id: str) -> bytes:
        """Return the raw content of ``file_id``; empty when Drive has none."""
        response = await self._pipeline.request(
            "GET",
            f"{self.API_BASE_URL}/files/{file_id}",
            params={"alt": "media"},
        )
        if response.status_code == httpx.codes.NO_CONTENT:
            return b""
        return response.content

    async def upload_content(self, file_id: str, payload: bytes) -> None:
        """Replace the entire content of ``file_id`` with ``payload``."""
        await self._pipeline.request(
            "PATCH",
            f"{self.UPLOAD_BASE_URL}/files/{file_id}",
            params={"uploadType": "media"},
            headers={"Content-Type": JSON_MIME_TYPE},
            content=payload,
        )

    async def get_account_email(self) -> Optional[str]:
        """Look up the signed-in account's email address."""
        response = await self._pipeline.request(
            "GET",
            f"{self.API_BASE_URL}/about",
            params={"fields": "user(emailAddress)"},
        )
        user = _json_body(response).get("user") or {}
        return user.get("emailAddress")


__all__ = ["GoogleDriveClient", "JSON_MIME_TYPE"]
