"""
Pull and push the whole-application JSON snapshot.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from drivesync.clients.google_drive import GoogleDriveClient
from drivesync.models.document import NoData, NoDataReason, PullResult, SyncDocument
from drivesync.schemas import SyncStatus
from drivesync.services.file_resolver import FileResolver
from drivesync.services.token_manager import TokenManager
from drivesync.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class DocumentSyncService:
    """Coordinator owning the session and the consumer-facing operations.

    ``pull`` and ``push`` share one lock, so at most one sync operation is in
    flight and waiting callers run in arrival order.
    """

    def __init__(
        self,
        session: TokenStore,
        token_manager: TokenManager,
        drive_client: GoogleDriveClient,
        resolver: FileResolver,
    ) -> None:
        self._session = session
        self._tokens = token_manager
        self._drive = drive_client
        self._resolver = resolver
        self._lock = asyncio.Lock()

    def sign_in(self, redirect_to: Optional[str] = None) -> str:
        return self._tokens.sign_in(redirect_to=redirect_to)

    async def complete_sign_in(
        self,
        *,
        state: str,
        code: Optional[str] = None,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ) -> Optional[str]:
        return await self._tokens.complete_sign_in(
            state=state,
            code=code,
            error=error,
            error_description=error_description,
        )

    def sign_out(self) -> None:
        self._tokens.sign_out()

    def status(self) -> SyncStatus:
        return self._session.status()

    async def pull(self) -> PullResult:
        """Return the remote document, or ``NoData`` when there is none."""
        async with self._lock:
            file_id = await self._resolver.resolve()
            raw = await self._drive.download_content(file_id)

        if not raw.strip():
            return NoData(NoDataReason.EMPTY)
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(
                "Remote document %s is not valid JSON (%d bytes); treating as no data.",
                file_id,
                len(raw),
            )
            return NoData(NoDataReason.MALFORMED)

    async def push(self, document: SyncDocument) -> Optional[str]:
        """Overwrite the remote document and return the recorded sync time.

        Returns ``None`` if the session was signed out while the upload ran.
        """
        payload = json.dumps(document).encode("utf-8")
        async with self._lock:
            generation = self._session.generation
            file_id = await self._resolver.resolve()
            await self._drive.upload_content(file_id, payload)
            last_sync = self._session.record_sync(generation=generation)
        logger.info("Pushed %d bytes to %s.", len(payload), file_id)
        return last_sync

    async def identify(self) -> Optional[str]:
        """Fetch and remember the signed-in account's email address."""
        generation = self._session.generation
        email = await self._drive.get_account_email()
        if email:
            self._session.set_account_email(email, generation=generation)
        return email


__all__ = ["DocumentSyncService"]
