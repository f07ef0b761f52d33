"""SQLite-backed key-value store.

Implements KeyValueStorePort over a single ``kv_store`` table holding JSON
values. Prefix queries compare the leading characters of the key exactly,
so they are case-sensitive and treat ``%`` and ``_`` literally.
"""

import json
import sqlite3
from typing import Any

from contact_desk.domain.errors import StoreError


class SQLiteKeyValueStore:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> dict[str, Any] | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read key {key!r}: {e}") from e

        if row is None:
            return None
        value: dict[str, Any] = json.loads(row[0])
        return value

    def set(self, key: str, value: dict[str, Any]) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                    (key, json.dumps(value)),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write key {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete key {key!r}: {e}") from e

    def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    "SELECT value FROM kv_store WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(prefix), prefix),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to scan prefix {prefix!r}: {e}") from e

        return [json.loads(row[0]) for row in rows]
