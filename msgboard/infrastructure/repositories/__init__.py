# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .json_files import JsonFilePostRepository, JsonFileUserRepository
from .memory import (InMemoryPostRepository, InMemorySessionTokenRepository,
                     InMemoryUserRepository)
from .sqlalchemy_posts import SqlAlchemyPostRepository
from .sqlalchemy_users import (SqlAlchemySessionTokenRepository,
                               SqlAlchemyUserRepository)

__all__ = [
    "InMemoryPostRepository",
    "InMemorySessionTokenRepository",
    "InMemoryUserRepository",
    "JsonFilePostRepository",
    "JsonFileUserRepository",
    "SqlAlchemyPostRepository",
    "SqlAlchemySessionTokenRepository",
    "SqlAlchemyUserRepository",
]
