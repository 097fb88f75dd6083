# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from msgboard.domain.posts.entities import Post
from msgboard.domain.posts.exceptions import EmptyContentError
from msgboard.domain.posts.repositories import PostRepository
from msgboard.domain.users.exceptions import InvalidInputError
from msgboard.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PostStore:
    """Append-only board; ``recent_limit`` of 0 means the whole board."""

    def __init__(
        self,
        *,
        posts: PostRepository,
        recent_limit: int = 50,
        max_length: int = 1000,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._posts = posts
        self._recent_limit = recent_limit or None
        self._max_length = max_length
        self._clock = clock

    def append(self, author: str, content: str) -> Post:
        text = (content or "").strip()
        if not text:
            raise EmptyContentError()
        if len(text) > self._max_length:
            raise InvalidInputError(
                context={"field": "content", "max_length": self._max_length}
            )
        post = self._posts.append(Post(author=author, content=text, created_at=self._clock()))
        logger.info(f"posts.append: ok author={author} length={len(text)}")
        return post

    def list_recent(self, limit: int | None = None) -> Sequence[Post]:
        return self._posts.list_recent(self._effective_limit(limit))

    def _effective_limit(self, requested: int | None) -> int | None:
        if requested is None or requested <= 0:
            return self._recent_limit
        if self._recent_limit is None:
            return requested
        return min(requested, self._recent_limit)
