from __future__ import annotations

import uuid
from typing import Optional

import psycopg2
from psycopg2 import errorcodes

from domain.exceptions import AccountStoreError, UsernameTakenError
from domain.models import Account
from domain.repositories import AccountRepository

# Name Postgres gives the UNIQUE constraint on accounts.username.
USERNAME_CONSTRAINT = "accounts_username_key"


class PostgresAccountRepository(AccountRepository):
    """
    Postgres-backed implementation of `AccountRepository`.

    Same schema as the SQLite variant. A `unique_violation` (SQLSTATE
    23505) on the username constraint is reported as `UsernameTakenError`.
    """

    def __init__(self, db_params: dict) -> None:
        self._db_params = db_params
        self._ensure_table()

    def _get_connection(self):
        try:
            return psycopg2.connect(**self._db_params)
        except psycopg2.Error as exc:
            raise AccountStoreError(f"Could not connect to Postgres: {exc}") from exc

    def _ensure_table(self) -> None:
        conn = self._get_connection()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        CREATE TABLE IF NOT EXISTS accounts (
                            id TEXT PRIMARY KEY,
                            username TEXT NOT NULL UNIQUE,
                            password_hash TEXT NOT NULL
                        )
                        """
                    )
        except psycopg2.Error as exc:
            raise AccountStoreError(f"Could not initialise accounts table: {exc}") from exc
        finally:
            conn.close()

    @staticmethod
    def _to_domain(row: tuple) -> Account:
        return Account(id=str(row[0]), username=row[1], password_hash=row[2])

    def _fetch_one(self, where: str, value: str) -> Optional[Account]:
        conn = self._get_connection()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(
                        f"SELECT id, username, password_hash FROM accounts WHERE {where} = %s",
                        (value,),
                    )
                    row = cur.fetchone()
        except (psycopg2.Error, UnicodeError) as exc:
            raise AccountStoreError(f"Account lookup failed: {exc}") from exc
        finally:
            conn.close()
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
        conn = self._get_connection()
        try:
            # `with conn` commits on success and rolls back on error.
            with conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO accounts (id, username, password_hash)
                        VALUES (%s, %s, %s)
                        """,
                        (account.id, account.username, account.password_hash),
                    )
        except psycopg2.Error as exc:
            if (
                exc.pgcode == errorcodes.UNIQUE_VIOLATION
                and exc.diag.constraint_name == USERNAME_CONSTRAINT
            ):
                raise UsernameTakenError(username) from exc
            raise AccountStoreError(f"Could not create account: {exc}") from exc
        except UnicodeError as exc:
            raise AccountStoreError(f"Could not create account: {exc}") from exc
        finally:
            conn.close()
        return account
