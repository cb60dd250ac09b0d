from __future__ import annotations

import sqlite3
from contextlib import closing
from typing import Optional

from domain.exceptions import SessionStoreError
from domain.repositories import SessionRepository


class SqliteSessionRepository(SessionRepository):
    """
    SQLite-backed implementation of `SessionRepository`.

    Stores one row per (session_id, claim name) in a `session_claims`
    table. Writes are upserts, so the last write wins.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        try:
            with closing(self._get_connection()) as conn, conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS session_claims (
                        session_id TEXT NOT NULL,
                        name TEXT NOT NULL,
                        value TEXT NOT NULL,
                        PRIMARY KEY (session_id, name)
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise SessionStoreError(f"Could not initialise session table: {exc}") from exc

    def get_claim(self, session_id: str, name: str) -> Optional[str]:
        try:
            with closing(self._get_connection()) as conn, conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    SELECT value
                    FROM session_claims
                    WHERE session_id = ? AND name = ?
                    """,
                    (session_id, name),
                )
                row = cur.fetchone()
        except (sqlite3.Error, UnicodeError) as exc:
            raise SessionStoreError(f"Could not read session claim: {exc}") from exc
        if not row:
            return None
        return str(row[0])

    def set_claim(self, session_id: str, name: str, value: str) -> None:
        try:
            with closing(self._get_connection()) as conn, conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO session_claims (session_id, name, value)
                    VALUES (?, ?, ?)
                    ON CONFLICT (session_id, name)
                    DO UPDATE SET value = excluded.value
                    """,
                    (session_id, name, value),
                )
                conn.commit()
        except (sqlite3.Error, UnicodeError) as exc:
            raise SessionStoreError(f"Could not write session claim: {exc}") from exc
