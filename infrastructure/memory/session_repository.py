from __future__ import annotations

from typing import Dict, Optional

from domain.repositories import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Process-local session claims, keyed by session ID."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Dict[str, str]] = {}

    def get_claim(self, session_id: str, name: str) -> Optional[str]:
        return self._sessions.get(session_id, {}).get(name)

    def set_claim(self, session_id: str, name: str, value: str) -> None:
        self._sessions.setdefault(session_id, {})[name] = value
