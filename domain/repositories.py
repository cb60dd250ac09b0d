from __future__ import annotations

from typing import Optional, Protocol

from .models import Account


class AccountRepository(Protocol):
    """
    Persistence abstraction for platform accounts (username/password).

    Implementations are responsible for:
    - Enforcing username uniqueness atomically when creating an account.
    - Translating driver errors into `UsernameTakenError` (conflict) or
      `AccountStoreError` (anything else).
    """

    def get_by_username(self, username: str) -> Optional[Account]:
        """Return the account with the given username, or None if not found."""

        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return the account with the given ID, or None if not found."""

        ...

    def create_account(self, username: str, password_hash: str) -> Account:
        """
        Persist a new account and return it with its assigned ID.

        Raises `UsernameTakenError` if the username already exists.
        """

        ...


class SessionRepository(Protocol):
    """
    Stores named claims per session.

    A session is addressed by an opaque string key handed out by the
    transport layer. Session lifetime and expiry are the transport's
    concern; this abstraction only reads and writes claims.
    """

    def get_claim(self, session_id: str, name: str) -> Optional[str]:
        """Return the value of claim `name` for the session, if set."""

        ...

    def set_claim(self, session_id: str, name: str, value: str) -> None:
        """Create or overwrite claim `name` for the session."""

        ...
