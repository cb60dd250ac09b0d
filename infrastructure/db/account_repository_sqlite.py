from __future__ import annotations

import sqlite3
import uuid
from contextlib import closing
from typing import Optional

from domain.exceptions import AccountStoreError, UsernameTakenError
from domain.models import Account
from domain.repositories import AccountRepository


class SqliteAccountRepository(AccountRepository):
    """
    SQLite-backed implementation of `AccountRepository`.

    Manages the `accounts` table, which stores usernames and password
    hashes. The UNIQUE constraint on `username` is what makes concurrent
    registrations of the same name safe.
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
                    CREATE TABLE IF NOT EXISTS accounts (
                        id TEXT PRIMARY KEY,
                        username TEXT NOT NULL UNIQUE,
                        password_hash TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise AccountStoreError(f"Could not initialise accounts table: {exc}") from exc

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Account:
        return Account(
            id=str(row[0]),
            username=row[1],
            password_hash=row[2],
        )

    def _fetch_one(self, where: str, value: str) -> Optional[Account]:
        try:
            with closing(self._get_connection()) as conn, conn:
                cur = conn.cursor()
                cur.execute(
                    f"SELECT id, username, password_hash FROM accounts WHERE {where} = ?",
                    (value,),
                )
                row = cur.fetchone()
        # Strings that cannot be encoded (lone surrogates) fail at binding time.
        except (sqlite3.Error, UnicodeError) as exc:
            raise AccountStoreError(f"Account lookup failed: {exc}") from exc
        if not row:
            return None
        return self._to_domain(row)

    def get_by_username(self, username: str) -> Optional[Account]:
        return self._fetch_one("username", username)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return self._fetch_one("id", account_id)

    def create_account(self, username: str, password_hash: str) -> Account:
        account = Account(
            id=uuid.uuid4().hex,
            username=username,
            password_hash=password_hash,
        )
        try:
            with closing(self._get_connection()) as conn, conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO accounts (id, username, password_hash)
                    VALUES (?, ?, ?)
                    """,
                    (account.id, account.username, account.password_hash),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            if "accounts.username" in str(exc):
                raise UsernameTakenError(username) from exc
            raise AccountStoreError(f"Could not create account: {exc}") from exc
        except (sqlite3.Error, UnicodeError) as exc:
            raise AccountStoreError(f"Could not create account: {exc}") from exc
        return account
