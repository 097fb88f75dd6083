# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flat-file stores: ``users.json`` maps usernames to hashes, ``posts.json``
is an append-only list. Each write rewrites the file atomically under a lock;
the in-memory copy is rolled back when the write fails."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import Any

from msgboard.domain.posts.entities import Post
from msgboard.domain.posts.repositories import PostRepository
from msgboard.domain.users.entities import User
from msgboard.domain.users.exceptions import DuplicateUsernameError
from msgboard.domain.users.repositories import UserRepository
from msgboard.shared.errors import StorageError
from msgboard.shared.logging import logger
from msgboard.utils.fs import read_json, write_json_atomic


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str) and value:
        try:
            # JavaScript's Date.toJSON() ends with "Z".
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"json store: unreadable timestamp {value!r}")
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.fromtimestamp(0, UTC)


def post_from_record(record: dict[str, Any], index: int) -> Post:
    """Accept both current records and the legacy ``name``/``message``/
    ``timestamp`` layout written by the file-backed board."""

    return Post(
        id=index + 1,
        author=str(record.get("author", record.get("name", ""))),
        content=str(record.get("content", record.get("message", ""))),
        created_at=parse_timestamp(record.get("created_at", record.get("timestamp"))),
    )


def _load(path: Path, default: Any, operation: str) -> Any:
    try:
        data = read_json(path, default)
    except (OSError, ValueError) as exc:
        raise StorageError(operation) from exc
    if not isinstance(data, type(default)):
        logger.error(f"json store: {path} does not hold a {type(default).__name__}")
        raise StorageError(operation)
    return data


def _store(path: Path, data: Any, operation: str) -> None:
    try:
        write_json_atomic(path, data)
    except (OSError, TypeError) as exc:
        raise StorageError(operation) from exc


class JsonFileUserRepository(UserRepository):
    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = Lock()
        self._records: dict[str, dict[str, Any]] = _load(path, {}, "users.load")
        logger.info(f"json store: loaded {len(self._records)} users from {path}")

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            record = self._records.get(username)
        if not isinstance(record, dict) or "password_hash" not in record:
            return None
        return User(
            username=username,
            password_hash=record["password_hash"],
            created_at=parse_timestamp(record.get("created_at")),
        )

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._records:
                raise DuplicateUsernameError(context={"username": user.username})
            self._records[user.username] = {
                "password_hash": user.password_hash,
                "created_at": user.created_at.isoformat(),
            }
            try:
                _store(self._path, self._records, "users.add")
            except StorageError:
                del self._records[user.username]
                raise
        return user


class JsonFilePostRepository(PostRepository):
    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = Lock()
        self._records: list[dict[str, Any]] = _load(path, [], "posts.load")
        logger.info(f"json store: loaded {len(self._records)} posts from {path}")

    def append(self, post: Post) -> Post:
        record = {
            "author": post.author,
            "content": post.content,
            "created_at": post.created_at.isoformat(),
        }
        with self._lock:
            self._records.append(record)
            try:
                _store(self._path, self._records, "posts.append")
            except StorageError:
                self._records.pop()
                raise
            index = len(self._records) - 1
        return post_from_record(record, index)

    def list_recent(self, limit: int | None) -> Sequence[Post]:
        with self._lock:
            indexed = list(enumerate(self._records))
        indexed.reverse()
        if limit is not None:
            indexed = indexed[:limit]
        return [post_from_record(record, index) for index, record in indexed]
