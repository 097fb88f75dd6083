# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from msgboard.domain.users.entities import User
from msgboard.domain.users.exceptions import (InvalidInputError,
                                              UnknownUserError,
                                              WrongSecretError)
from msgboard.domain.users.repositories import PasswordHasher, UserRepository
from msgboard.shared.logging import logger

USERNAME_MAX_LENGTH = 64


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CredentialStore:
    """Owns user records: registration and secret verification."""

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._clock = clock
        self._dummy_hash: str | None = None

    def register(self, username: str, secret: str) -> User:
        if not username or not username.strip():
            raise InvalidInputError(context={"field": "username"})
        if username != username.strip():
            raise InvalidInputError(context={"field": "username", "reason": "surrounding_whitespace"})
        if len(username) > USERNAME_MAX_LENGTH:
            raise InvalidInputError(
                context={"field": "username", "max_length": USERNAME_MAX_LENGTH}
            )
        if not secret:
            raise InvalidInputError(context={"field": "secret"})

        user = User(
            username=username,
            password_hash=self._password_hasher.hash(secret),
            created_at=self._clock(),
        )
        # Uniqueness is enforced by the repository insert itself.
        persisted = self._users.add(user)
        logger.info(f"credentials.register: ok username={username}")
        return persisted

    def verify(self, username: str, secret: str) -> User:
        user = self._users.find_by_username(username) if username else None
        if user is None:
            # Spend the same hashing time as a real check.
            self._password_hasher.verify(secret or "", self._get_dummy_hash())
            raise UnknownUserError()
        if not self._password_hasher.verify(secret or "", user.password_hash):
            raise WrongSecretError()
        return user

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash("msgboard-dummy-secret")
        return self._dummy_hash
