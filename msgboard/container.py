# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from msgboard.application.services.credential_store import CredentialStore
from msgboard.application.services.password_hashing import \
    WerkzeugPasswordHasher
from msgboard.application.services.post_store import PostStore
from msgboard.application.services.session_manager import SessionManager
from msgboard.application.use_cases.users.login_user import LoginUserUseCase
from msgboard.application.use_cases.users.logout_user import LogoutUserUseCase
from msgboard.application.use_cases.users.register_user import \
    RegisterUserUseCase
from msgboard.domain.posts.repositories import PostRepository
from msgboard.domain.users.repositories import (PasswordHasher,
                                                SessionTokenRepository,
                                                UserRepository)
from msgboard.infrastructure.db import (create_db_engine,
                                        create_session_factory, init_db)
from msgboard.infrastructure.health import check_storage
from msgboard.infrastructure.repositories import (
    InMemoryPostRepository, InMemorySessionTokenRepository,
    InMemoryUserRepository, JsonFilePostRepository, JsonFileUserRepository,
    SqlAlchemyPostRepository, SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository)
from msgboard.interfaces.http.controllers.auth_controller import AuthController
from msgboard.interfaces.http.controllers.misc_controller import MiscController
from msgboard.interfaces.http.controllers.posts_controller import \
    PostsController
from msgboard.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @property
    def backend(self) -> str:
        return self.config.storage.backend

    # Storage

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    def init_storage(self) -> None:
        if self.backend == "sql":
            init_db(self.engine)
        elif self.backend == "json":
            self.config.storage.data_dir.mkdir(parents=True, exist_ok=True)

    def check_storage(self) -> None:
        check_storage(self.config.storage, self.engine if self.backend == "sql" else None)

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.backend == "sql":
            return SqlAlchemyUserRepository(self.session_factory)
        if self.backend == "json":
            return JsonFileUserRepository(self.config.storage.users_file)
        return InMemoryUserRepository()

    @cached_property
    def session_token_repository(self) -> SessionTokenRepository:
        if self.backend == "sql":
            return SqlAlchemySessionTokenRepository(self.session_factory)
        return InMemorySessionTokenRepository()

    @cached_property
    def post_repository(self) -> PostRepository:
        if self.backend == "sql":
            return SqlAlchemyPostRepository(self.session_factory)
        if self.backend == "json":
            return JsonFilePostRepository(self.config.storage.posts_file)
        return InMemoryPostRepository()

    # Services

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            tokens=self.session_token_repository,
            ttl_seconds=self.config.security.session_ttl,
        )

    @cached_property
    def post_store(self) -> PostStore:
        return PostStore(
            posts=self.post_repository,
            recent_limit=self.config.posts.recent_limit,
            max_length=self.config.posts.max_length,
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_manager,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_manager,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            sessions=self.session_manager,
            security=self.config.security,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            posts=self.post_store,
            sessions=self.session_manager,
            security=self.config.security,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(storage_name=self.backend, storage_check=self.check_storage)
