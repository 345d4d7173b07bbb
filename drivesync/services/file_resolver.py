"""
Locate or provision the single backing document on Drive.
"""

from __future__ import annotations

import logging

from drivesync.clients.google_drive import GoogleDriveClient
from drivesync.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class FileResolver:
    """Map the fixed document name to a Drive file id, creating it if absent.

    Once resolved, the id is served from the session until sign-out. When
    several files share the name, the oldest by creation time wins. An id
    found after the session was cleared is returned but not cached.
    """

    def __init__(
        self, drive_client: GoogleDriveClient, session: TokenStore, *, document_name: str
    ) -> None:
        self._drive = drive_client
        self._session = session
        self._document_name = document_name

    async def resolve(self) -> str:
        cached_id = self._session.file_id
        if cached_id:
            return cached_id

        generation = self._session.generation

        matches = await self._drive.search_files(self._document_name)
        if matches:
            if len(matches) > 1:
                logger.warning(
                    "Found %d files named %s; using the oldest (%s).",
                    len(matches),
                    self._document_name,
                    matches[0]["id"],
                )
            file_id = matches[0]["id"]
        else:
            file_id = await self._drive.create_file(self._document_name)
            logger.info("Created %s on Drive (%s).", self._document_name, file_id)

        self._session.set_file_id(file_id, generation=generation)
        return file_id


__all__ = ["FileResolver"]
