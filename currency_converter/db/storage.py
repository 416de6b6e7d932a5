"""Key/value storage backed by SQLite.

Mirrors the small async-storage API a mobile app gets from its host:
``get_item``, ``set_item`` and ``remove_item`` on string values. Every write
replaces a whole value inside one transaction, so a failed write leaves the
previous value intact.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Optional

from currency_converter.core.errors import StorageReadError, StorageWriteError

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"


class KeyValueStore:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    def get_item(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                row = cur.fetchone()
                return row["value"] if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageReadError(f"failed to read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        f"""
                        INSERT INTO kv_store (key, value)
                        VALUES (?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = ({UTC_NOW_SQL})
                        """,
                        (key, value),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageWriteError(f"failed to write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageWriteError(f"failed to remove '{key}': {e}") from e
