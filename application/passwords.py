from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from domain.exceptions import PasswordHashError


class PasswordHasher:
    """
    Argon2id password hashing.

    Every call to `hash` embeds a fresh random salt, so hashing the same
    password twice yields different strings that both verify.
    """

    def __init__(
        self,
        time_cost: int | None = None,
        memory_cost: int | None = None,
        parallelism: int | None = None,
    ) -> None:
        options = {
            "time_cost": time_cost,
            "memory_cost": memory_cost,
            "parallelism": parallelism,
        }
        self._hasher = _Argon2Hasher(
            **{name: value for name, value in options.items() if value is not None}
        )

    def hash(self, plain: str) -> str:
        try:
            return self._hasher.hash(plain)
        except (HashingError, UnicodeError) as exc:
            raise PasswordHashError("Could not hash password") from exc

    def verify(self, hashed: str, plain: str) -> bool:
        """
        Return whether `plain` matches the stored `hashed` value.

        A mismatch is a normal outcome and returns False. A stored hash that
        cannot be parsed, or input that cannot be encoded, raises
        `PasswordHashError`.
        """

        try:
            return self._hasher.verify(hashed, plain)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError, UnicodeError) as exc:
            raise PasswordHashError("Could not verify password against stored hash") from exc

    def needs_rehash(self, hashed: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(hashed)
        except (InvalidHashError, UnicodeError) as exc:
            raise PasswordHashError("Stored password hash is invalid") from exc
