from __future__ import annotations

import threading
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from msgboard.domain.posts.entities import Post
from msgboard.domain.users.entities import SessionToken, User
from msgboard.domain.users.exceptions import DuplicateUsernameError
from msgboard.infrastructure.db import (create_db_engine,
                                        create_session_factory, init_db)
from msgboard.infrastructure.repositories import (
    SqlAlchemyPostRepository, SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository)
from msgboard.shared.config import DatabaseConfig
from msgboard.shared.errors import StorageError

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    engine = create_db_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'board.db'}"))
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


def _user(name: str) -> User:
    return User(username=name, password_hash=f"hash-{name}", created_at=NOW)


def test_user_add_and_find(session_factory) -> None:
    users = SqlAlchemyUserRepository(session_factory)

    users.add(_user("alice"))
    found = users.find_by_username("alice")

    assert found is not None
    assert found.password_hash == "hash-alice"
    assert found.created_at == NOW
    assert users.find_by_username("bob") is None


def test_user_add_duplicate(session_factory) -> None:
    users = SqlAlchemyUserRepository(session_factory)
    users.add(_user("alice"))

    with pytest.raises(DuplicateUsernameError):
        users.add(User(username="alice", password_hash="other", created_at=NOW))

    found = users.find_by_username("alice")
    assert found is not None and found.password_hash == "hash-alice"


def test_concurrent_registration_of_one_name(session_factory) -> None:
    users = SqlAlchemyUserRepository(session_factory)
    barrier = threading.Barrier(6)
    outcomes: list[str] = []
    lock = threading.Lock()

    def attempt(i: int) -> None:
        barrier.wait()
        try:
            users.add(User(username="alice", password_hash=f"hash-{i}", created_at=NOW))
            result = "ok"
        except DuplicateUsernameError:
            result = "duplicate"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == 5


def test_posts_newest_first(session_factory) -> None:
    posts = SqlAlchemyPostRepository(session_factory)
    for i in range(4):
        stored = posts.append(Post(author="alice", content=f"post {i}", created_at=NOW))
        assert stored.id == i + 1

    assert [p.content for p in posts.list_recent(None)] == ["post 3", "post 2", "post 1", "post 0"]
    assert [p.content for p in posts.list_recent(2)] == ["post 3", "post 2"]
    assert posts.list_recent(1)[0].created_at == NOW


def test_session_tokens_lifecycle(session_factory) -> None:
    tokens = SqlAlchemySessionTokenRepository(session_factory)
    session = SessionToken(
        token="tok-1", username="alice", created_at=NOW, expires_at=NOW + timedelta(hours=1)
    )

    assert tokens.add(session) is True
    assert tokens.add(session) is False
    assert tokens.get("tok-1") == session

    tokens.revoke("tok-1")
    tokens.revoke("tok-1")
    assert tokens.get("tok-1") is None


def test_session_tokens_purge_expired(session_factory) -> None:
    tokens = SqlAlchemySessionTokenRepository(session_factory)
    tokens.add(SessionToken(token="old", username="a", created_at=NOW, expires_at=NOW))
    tokens.add(
        SessionToken(token="new", username="b", created_at=NOW, expires_at=NOW + timedelta(days=1))
    )
    tokens.add(SessionToken(token="forever", username="c", created_at=NOW))

    assert tokens.purge_expired(NOW + timedelta(minutes=1)) == 1
    assert tokens.get("old") is None
    assert tokens.get("new") is not None
    assert tokens.get("forever") is not None


def test_database_failure_becomes_storage_error() -> None:
    failing = MagicMock(side_effect=OperationalError("SELECT 1", {}, Exception("disk I/O error")))

    with pytest.raises(StorageError) as excinfo:
        SqlAlchemyUserRepository(failing).find_by_username("alice")
    assert excinfo.value.operation == "users.find"
    assert excinfo.value.to_dict() == {"error": "storage_error"}

    with pytest.raises(StorageError):
        SqlAlchemyPostRepository(failing).append(Post(author="a", content="b", created_at=NOW))
