"""Use-case for revoking session tokens."""

from __future__ import annotations

from msgboard.application.services.session_manager import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> str | None:
        """Destroy the session and return the username it belonged to, if any."""

        username = self._sessions.resolve(token)
        self._sessions.destroy(token)
        return username
