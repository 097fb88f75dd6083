# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque session tokens bound to usernames."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from msgboard.domain.users.entities import SessionToken
from msgboard.domain.users.exceptions import UnauthorizedError
from msgboard.domain.users.repositories import SessionTokenRepository
from msgboard.shared.logging import logger

TOKEN_BYTES = 32
MAX_ISSUE_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    def __init__(
        self,
        *,
        tokens: SessionTokenRepository,
        ttl_seconds: int = 0,
        clock: Callable[[], datetime] = _utcnow,
        token_factory: Callable[[], str] | None = None,
    ) -> None:
        self._tokens = tokens
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds > 0 else None
        self._clock = clock
        self._token_factory = token_factory or (lambda: secrets.token_urlsafe(TOKEN_BYTES))

    def create(self, username: str) -> SessionToken:
        """Issue a fresh token; existing sessions of the user stay valid."""

        now = self._clock()
        expires_at = now + self._ttl if self._ttl is not None else None
        if self._ttl is not None:
            purged = self._tokens.purge_expired(now)
            if purged:
                logger.debug(f"sessions.create: purged {purged} expired sessions")
        for _ in range(MAX_ISSUE_ATTEMPTS):
            session = SessionToken(
                token=self._token_factory(),
                username=username,
                created_at=now,
                expires_at=expires_at,
            )
            if self._tokens.add(session):
                logger.info(
                    f"sessions.create: user={username} tok={session.token[:8]}… "
                    f"exp={expires_at.isoformat() if expires_at else 'never'}"
                )
                return session
            logger.warning("sessions.create: token collision, regenerating")
        raise RuntimeError("could not issue a unique session token")

    def resolve(self, token: str | None) -> str | None:
        if not token:
            return None
        session = self._tokens.get(token)
        if session is None:
            return None
        if session.is_expired(self._clock()):
            logger.debug(f"sessions.resolve: expired tok={token[:8]}…")
            self._tokens.revoke(token)
            return None
        return session.username

    def destroy(self, token: str | None) -> None:
        if token:
            self._tokens.revoke(token)

    def require_authenticated(self, token: str | None) -> str:
        username = self.resolve(token)
        if username is None:
            raise UnauthorizedError()
        return username
