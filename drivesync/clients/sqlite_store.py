"""SQLite-backed key/value storage for local session state."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, Iterable, Optional


class SQLiteStore:
    """Persist string values under string keys in a single table."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sync_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get_value(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM sync_state WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def set_value(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO sync_state (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def delete_values(self, keys: Iterable[str]) -> None:
        """Delete ``keys`` in one transaction."""
        with self._connect() as conn:
            conn.executemany(
                "DELETE FROM sync_state WHERE key = ?",
                [(key,) for key in keys],
            )

    def items(self) -> Dict[str, str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM sync_state").fetchall()
        return {row["key"]: row["value"] for row in rows}


__all__ = ["SQLiteStore"]
