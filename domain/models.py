from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """
    Authentication identity: a username with its password hash.

    `id` is an opaque surrogate key assigned by the account store when the
    account is created. Neither `id` nor `username` changes afterwards.
    """

    id: str
    username: str
    password_hash: str


@dataclass(frozen=True)
class FieldError:
    """A user-correctable error tied to one input field."""

    field: str
    message: str
