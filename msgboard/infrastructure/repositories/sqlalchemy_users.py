# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from msgboard.domain.users.entities import SessionToken as DomainSessionToken
from msgboard.domain.users.entities import User as DomainUser
from msgboard.domain.users.exceptions import DuplicateUsernameError
from msgboard.domain.users.repositories import SessionTokenRepository, UserRepository
from msgboard.infrastructure.db.models import SessionToken, User
from msgboard.infrastructure.unit_of_work import SqlAlchemyUnitOfWork


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _user_to_domain(row: User) -> DomainUser:
    return DomainUser(
        username=row.username,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at) or datetime.now(UTC),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with SqlAlchemyUnitOfWork(self._session_factory, "users.find") as session:
            row = session.query(User).filter(User.username == username).first()
            return _user_to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with SqlAlchemyUnitOfWork(self._session_factory, "users.add") as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                persisted = _user_to_domain(row)
        except IntegrityError as exc:
            raise DuplicateUsernameError(context={"username": user.username}) from exc
        return persisted


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, session: DomainSessionToken) -> bool:
        try:
            with SqlAlchemyUnitOfWork(self._session_factory, "sessions.add") as db:
                db.add(
                    SessionToken(
                        token=session.token,
                        username=session.username,
                        created_at=session.created_at,
                        expires_at=session.expires_at,
                    )
                )
                db.flush()
        except IntegrityError:
            return False
        return True

    def get(self, token: str) -> DomainSessionToken | None:
        with SqlAlchemyUnitOfWork(self._session_factory, "sessions.get") as db:
            row = db.query(SessionToken).filter(SessionToken.token == token).first()
            if not row:
                return None
            return DomainSessionToken(
                token=row.token,
                username=row.username,
                created_at=as_utc(row.created_at) or datetime.now(UTC),
                expires_at=as_utc(row.expires_at),
            )

    def revoke(self, token: str) -> None:
        with SqlAlchemyUnitOfWork(self._session_factory, "sessions.revoke") as db:
            db.query(SessionToken).filter(SessionToken.token == token).delete()

    def purge_expired(self, now: datetime) -> int:
        with SqlAlchemyUnitOfWork(self._session_factory, "sessions.purge") as db:
            return (
                db.query(SessionToken)
                .filter(SessionToken.expires_at.is_not(None), SessionToken.expires_at <= now)
                .delete()
            )
