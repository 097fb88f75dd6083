# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Process-local stores guarded by a lock."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from threading import Lock

from msgboard.domain.posts.entities import Post
from msgboard.domain.posts.repositories import PostRepository
from msgboard.domain.users.entities import SessionToken, User
from msgboard.domain.users.exceptions import DuplicateUsernameError
from msgboard.domain.users.repositories import SessionTokenRepository, UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = Lock()

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            return self._users.get(username)

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._users:
                raise DuplicateUsernameError(context={"username": user.username})
            self._users[user.username] = user
            return user


class InMemorySessionTokenRepository(SessionTokenRepository):
    def __init__(self) -> None:
        self._sessions: dict[str, SessionToken] = {}
        self._lock = Lock()

    def add(self, session: SessionToken) -> bool:
        with self._lock:
            if session.token in self._sessions:
                return False
            self._sessions[session.token] = session
            return True

    def get(self, token: str) -> SessionToken | None:
        with self._lock:
            return self._sessions.get(token)

    def revoke(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [tok for tok, s in self._sessions.items() if s.is_expired(now)]
            for tok in expired:
                del self._sessions[tok]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class InMemoryPostRepository(PostRepository):
    def __init__(self) -> None:
        self._posts: list[Post] = []
        self._lock = Lock()

    def append(self, post: Post) -> Post:
        with self._lock:
            stored = replace(post, id=len(self._posts) + 1)
            self._posts.append(stored)
            return stored

    def list_recent(self, limit: int | None) -> Sequence[Post]:
        with self._lock:
            newest_first = self._posts[::-1]
        return newest_first if limit is None else newest_first[:limit]
