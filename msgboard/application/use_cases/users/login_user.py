# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from msgboard.application.services.credential_store import CredentialStore
from msgboard.application.services.session_manager import SessionManager
from msgboard.domain.users.entities import SessionToken
from msgboard.domain.users.exceptions import InvalidCredentialsError
from msgboard.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionManager,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions

    def execute(self, username: str, secret: str, ip_address: str | None = None) -> SessionToken:
        try:
            user = self._credentials.verify(username, secret)
        except InvalidCredentialsError as exc:
            logger.warning(
                f"auth.login: rejected username={username} reason={type(exc).__name__} "
                f"ip={ip_address or 'unknown'}"
            )
            raise
        return self._sessions.create(user.username)
