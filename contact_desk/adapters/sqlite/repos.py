import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from contact_desk.domain.entities import User
from contact_desk.domain.errors import StoreError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteUserRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def save(self, user: User) -> User:
        # Role is fixed at signup; the upsert never rewrites it.
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO users (
                        id, email, display_name, password_hash, role, status,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        email=excluded.email,
                        display_name=excluded.display_name,
                        password_hash=excluded.password_hash,
                        status=excluded.status,
                        updated_at=excluded.updated_at
                """,
                    (
                        str(user.id),
                        user.email,
                        user.display_name,
                        user.password_hash,
                        user.role,
                        user.status,
                        user.created_at.isoformat(),
                        user.updated_at.isoformat(),
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to save user {user.email}: {e}") from e
        return user

    def get_by_email(self, email: str) -> User | None:
        return self._fetch_one("SELECT * FROM users WHERE email = ?", (email,))

    def get_by_id(self, user_id: object) -> User | None:
        return self._fetch_one("SELECT * FROM users WHERE id = ?", (str(user_id),))

    def list_all(self) -> list[User]:
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT * FROM users ORDER BY email").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list users: {e}") from e
        return [self._map_row_to_user(row) for row in rows]

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> User | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(sql, params).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load user: {e}") from e
        if not row:
            return None
        return self._map_row_to_user(row)

    def _map_row_to_user(self, row: dict[str, Any]) -> User:
        return User(
            id=UUID(row["id"]),
            email=row["email"],
            display_name=row["display_name"],
            password_hash=row["password_hash"],
            role=row["role"],
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
