from __future__ import annotations

from typing import Optional

from domain.models import FieldError

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 4


def _length(value: str) -> int:
    """Length in UTF-16 code units, the way browser and JS clients count it."""

    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def validate_username(username: str) -> Optional[FieldError]:
    if _length(username) < USERNAME_MIN_LENGTH:
        return FieldError(
            field="username",
            message=f"length must be greater than {USERNAME_MIN_LENGTH - 1}",
        )
    return None


def validate_password(password: str) -> Optional[FieldError]:
    if _length(password) < PASSWORD_MIN_LENGTH:
        return FieldError(
            field="password",
            message=f"length must be greater than {PASSWORD_MIN_LENGTH - 1}",
        )
    return None


def validate_credentials(username: str, password: str) -> Optional[FieldError]:
    """
    Check a username/password pair and return the first error found.

    The username is checked before the password, so at most one error is
    reported per call.
    """

    return validate_username(username) or validate_password(password)
