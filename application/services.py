from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from application.session import AuthContext
from application.validation import validate_password, validate_username
from domain.exceptions import AuthError, UsernameTakenError
from domain.models import Account, FieldError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSuccess:
    """The operation succeeded and the session now points at `account`."""

    account: Account
    success: bool = field(default=True, init=False)

    @property
    def errors(self) -> None:
        return None


@dataclass(frozen=True)
class AuthFailure:
    """The input was rejected; `errors` explains which fields to fix."""

    errors: List[FieldError]
    success: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("AuthFailure requires at least one FieldError")

    @property
    def account(self) -> None:
        return None


@dataclass(frozen=True)
class AuthFault:
    """
    An internal failure (store, session or hash corruption).

    Kept apart from `AuthFailure` so callers can tell "fix your input"
    from "retry later". Nothing about the session was changed.
    """

    message: str
    cause: Optional[BaseException] = None
    success: bool = field(default=False, init=False)

    @property
    def account(self) -> None:
        return None

    @property
    def errors(self) -> None:
        return None


AuthResult = Union[AuthSuccess, AuthFailure, AuthFault]


def _failure(field_name: str, message: str) -> AuthFailure:
    return AuthFailure(errors=[FieldError(field=field_name, message=message)])


def register(username: str, password: str, ctx: AuthContext) -> AuthResult:
    """
    Create an account and log the caller in as that account.

    - The username is validated before the password, and both before
      hashing, so invalid input never reaches the hasher or the store.
    - The session claim is written only once the store has confirmed
      the account exists.
    """

    error = validate_username(username)
    if error:
        return AuthFailure(errors=[error])

    error = validate_password(password)
    if error:
        return AuthFailure(errors=[error])

    try:
        password_hash = ctx.hasher.hash(password)
        account = ctx.accounts.create_account(username, password_hash)
    except UsernameTakenError:
        logger.info("Registration rejected, username %r already taken", username)
        return _failure("username", "already taken")
    except AuthError as exc:
        logger.exception("Registration of %r failed", username)
        return AuthFault(message="Could not create account.", cause=exc)

    try:
        ctx.session.set_user_id(account.id)
    except AuthError as exc:
        logger.exception("Account %s created but session write failed", account.id)
        return AuthFault(message="Could not start session.", cause=exc)

    logger.info("Registered account %s (%r)", account.id, username)
    return AuthSuccess(account=account)


def login(username: str, password: str, ctx: AuthContext) -> AuthResult:
    """
    Verify a username/password pair and bind the session to the account.

    Unknown usernames and wrong passwords are reported on different
    fields, mirroring the messages the clients already display.
    """

    try:
        account = ctx.accounts.get_by_username(username)
        if account is None:
            return _failure("username", "username does not exists")

        if not ctx.hasher.verify(account.password_hash, password):
            return _failure("password", "password is incorrect")

        if ctx.hasher.needs_rehash(account.password_hash):
            logger.debug("Password hash for account %s uses outdated parameters", account.id)

        ctx.session.set_user_id(account.id)
    except AuthError as exc:
        logger.exception("Login of %r failed", username)
        return AuthFault(message="Could not log in.", cause=exc)

    logger.info("Account %s logged in", account.id)
    return AuthSuccess(account=account)


def me(ctx: AuthContext) -> Optional[Account]:
    """
    Return the account bound to the caller's session, if any.

    A session pointing at an account that no longer exists yields None.
    """

    account_id = ctx.session.user_id
    if account_id is None:
        return None
    return ctx.accounts.get_by_id(account_id)
