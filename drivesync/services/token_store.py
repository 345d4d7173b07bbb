"""
Persisted session state shared by every sync layer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from drivesync.clients.sqlite_store import SQLiteStore
from drivesync.schemas import SyncStatus

logger = logging.getLogger(__name__)


class TokenStore:
    """Holds the access token and the values derived from it.

    One instance is the session: the coordinator owns it and hands the same
    object to the request pipeline and the file resolver. Everything here is
    cleared together.
    """

    ACCESS_TOKEN_KEY = "access_token"
    FILE_ID_KEY = "file_id"
    LAST_SYNC_KEY = "last_sync"
    ACCOUNT_EMAIL_KEY = "account_email"

    _SESSION_KEYS = (ACCESS_TOKEN_KEY, FILE_ID_KEY, LAST_SYNC_KEY, ACCOUNT_EMAIL_KEY)

    def __init__(self, store: SQLiteStore) -> None:
        self._store = store
        self._generation = 0

    @property
    def generation(self) -> int:
        """Incremented by every ``clear()``; writes tagged with an older value are dropped."""
        return self._generation

    @property
    def access_token(self) -> Optional[str]:
        return self._store.get_value(self.ACCESS_TOKEN_KEY)

    @property
    def file_id(self) -> Optional[str]:
        return self._store.get_value(self.FILE_ID_KEY)

    @property
    def last_sync(self) -> Optional[str]:
        return self._store.get_value(self.LAST_SYNC_KEY)

    @property
    def account_email(self) -> Optional[str]:
        return self._store.get_value(self.ACCOUNT_EMAIL_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def set_access_token(self, token: str) -> None:
        if not token:
            raise ValueError("Access token must be a non-empty string.")
        self._store.set_value(self.ACCESS_TOKEN_KEY, token)

    def set_file_id(self, file_id: str, *, generation: int | None = None) -> bool:
        return self._set_derived(self.FILE_ID_KEY, file_id, generation)

    def set_account_email(self, email: str, *, generation: int | None = None) -> bool:
        return self._set_derived(self.ACCOUNT_EMAIL_KEY, email, generation)

    def record_sync(
        self, at: datetime | None = None, *, generation: int | None = None
    ) -> Optional[str]:
        """Store the time of a successful push and return it as ISO-8601.

        Returns ``None`` when the session was cleared since ``generation``.
        """
        timestamp = (at or datetime.now(timezone.utc)).isoformat()
        if not self._set_derived(self.LAST_SYNC_KEY, timestamp, generation):
            return None
        return timestamp

    def _set_derived(self, key: str, value: str, generation: int | None) -> bool:
        if generation is not None and generation != self._generation:
            logger.info("Session was cleared mid-request; not storing %s.", key)
            return False
        self._store.set_value(key, value)
        return True

    def clear(self) -> None:
        """Forget the token and every cached value derived from it."""
        self._store.delete_values(self._SESSION_KEYS)
        self._generation += 1
        logger.info("Cleared local sync session.")

    def status(self) -> SyncStatus:
        values = self._store.items()
        return SyncStatus(
            is_authenticated=bool(values.get(self.ACCESS_TOKEN_KEY)),
            account_email=values.get(self.ACCOUNT_EMAIL_KEY),
            last_sync=values.get(self.LAST_SYNC_KEY),
            file_id=values.get(self.FILE_ID_KEY),
        )


__all__ = ["TokenStore"]
