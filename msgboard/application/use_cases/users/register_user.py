# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from msgboard.application.services.credential_store import CredentialStore
from msgboard.application.services.session_manager import SessionManager
from msgboard.domain.users.entities import SessionToken, User


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionManager,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions

    def execute(self, username: str, secret: str) -> tuple[User, SessionToken]:
        user = self._credentials.register(username, secret)
        session = self._sessions.create(user.username)
        return user, session
