from __future__ import annotations

from typing import Optional

import psycopg2

from domain.exceptions import SessionStoreError
from domain.repositories import SessionRepository


class PostgresSessionRepository(SessionRepository):
    """
    Postgres-backed implementation of `SessionRepository`.

    Schema (minimal):
      - session_id TEXT
      - name TEXT
      - value TEXT
      - PRIMARY KEY (session_id, name)
    """

    def __init__(self, db_params: dict) -> None:
        self._db_params = db_params
        self._ensure_table()

    def _get_connection(self):
        try:
            return psycopg2.connect(**self._db_params)
        except psycopg2.Error as exc:
            raise SessionStoreError(f"Could not connect to Postgres: {exc}") from exc

    def _execute(self, query: str, params: tuple = ()) -> Optional[tuple]:
        conn = self._get_connection()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    if cur.description is None:
                        return None
                    return cur.fetchone()
        except (psycopg2.Error, UnicodeError) as exc:
            raise SessionStoreError(f"Session store query failed: {exc}") from exc
        finally:
            conn.close()

    def _ensure_table(self) -> None:
        self._execute(
            """
            CREATE TABLE IF NOT EXISTS session_claims (
                session_id TEXT NOT NULL,
                name TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (session_id, name)
            )
            """
        )

    def get_claim(self, session_id: str, name: str) -> Optional[str]:
        row = self._execute(
            """
            SELECT value
            FROM session_claims
            WHERE session_id = %s AND name = %s
            """,
            (session_id, name),
        )
        if not row:
            return None
        return str(row[0])

    def set_claim(self, session_id: str, name: str, value: str) -> None:
        self._execute(
            """
            INSERT INTO session_claims (session_id, name, value)
            VALUES (%s, %s, %s)
            ON CONFLICT (session_id, name)
            DO UPDATE SET value = EXCLUDED.value
            """,
            (session_id, name, value),
        )
