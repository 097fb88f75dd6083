from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from msgboard.domain.users.repositories import PasswordHasher
from msgboard.shared.config import (AppConfig, DatabaseConfig, PostsConfig,
                                    SecurityConfig, StorageConfig)

# werkzeug's default scrypt is far too slow for a test suite.
FAST_HASH = "pbkdf2:sha256:1000"


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verified: list[tuple[str, str]] = []

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append((password, hashed))
        return hashed == f"hashed:{password}"


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., AppConfig]:
    def _make(
        backend: str = "memory",
        *,
        recent_limit: int = 50,
        **security: object,
    ) -> AppConfig:
        return AppConfig(
            APP_ENV="test",
            database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'board.db'}"),
            storage=StorageConfig(STORAGE_BACKEND=backend, DATA_DIR=tmp_path / "data"),
            security=SecurityConfig(PASSWORD_HASH_METHOD=FAST_HASH, **security),
            posts=PostsConfig(POSTS_RECENT_LIMIT=recent_limit),
        )

    return _make
