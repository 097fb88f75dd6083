# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...

    def add(self, user: User) -> User:
        """Insert atomically; raise DuplicateUsernameError if the name is taken."""
        ...


class SessionTokenRepository(Protocol):
    def add(self, session: SessionToken) -> bool:
        """Store the session; return False if the token is already live."""
        ...

    def get(self, token: str) -> SessionToken | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
