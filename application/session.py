from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from application.passwords import PasswordHasher
from domain.repositories import AccountRepository, SessionRepository

# Name of the claim holding the authenticated account ID.
SESSION_CLAIM = "userId"


class SessionContext:
    """
    The caller's session, reduced to the single identity claim the
    account services read and write.
    """

    def __init__(self, session_id: str, sessions: SessionRepository) -> None:
        self.session_id = session_id
        self._sessions = sessions

    @property
    def user_id(self) -> Optional[str]:
        return self._sessions.get_claim(self.session_id, SESSION_CLAIM)

    def set_user_id(self, account_id: str) -> None:
        self._sessions.set_claim(self.session_id, SESSION_CLAIM, account_id)


@dataclass
class AuthContext:
    """
    Everything a register/login/me call needs from its caller.

    The transport layer builds one per incoming request; the application
    layer never looks at transport-specific types.
    """

    accounts: AccountRepository
    session: SessionContext
    hasher: PasswordHasher
