from __future__ import annotations


class AuthError(Exception):
    """Base class for internal failures of the account subsystem."""


class AccountStoreError(AuthError):
    """The account store failed for a reason other than a username conflict."""


class UsernameTakenError(AccountStoreError):
    """
    Raised by `AccountRepository.create_account` when the username is
    already held by another account.
    """

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username!r}")
        self.username = username


class SessionStoreError(AuthError):
    """Reading or writing a session claim failed."""


class PasswordHashError(AuthError):
    """
    Hashing failed, or a stored hash could not be verified because it is
    malformed.
    """
