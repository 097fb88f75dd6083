# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from msgboard.domain.posts.entities import Post as DomainPost
from msgboard.domain.posts.repositories import PostRepository
from msgboard.infrastructure.db.models import Post
from msgboard.infrastructure.unit_of_work import SqlAlchemyUnitOfWork

from .sqlalchemy_users import as_utc


def _post_to_domain(row: Post) -> DomainPost:
    return DomainPost(
        id=row.id,
        author=row.username,
        content=row.content,
        created_at=as_utc(row.created_at) or datetime.now(UTC),
    )


class SqlAlchemyPostRepository(PostRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def append(self, post: DomainPost) -> DomainPost:
        with SqlAlchemyUnitOfWork(self._session_factory, "posts.append") as session:
            row = Post(username=post.author, content=post.content, created_at=post.created_at)
            session.add(row)
            session.flush()
            return _post_to_domain(row)

    def list_recent(self, limit: int | None) -> Sequence[DomainPost]:
        with SqlAlchemyUnitOfWork(self._session_factory, "posts.list") as session:
            # Primary key order is insertion order.
            query = session.query(Post).order_by(Post.id.desc())
            if limit is not None:
                query = query.limit(limit)
            return [_post_to_domain(row) for row in query.all()]
