# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.credential_store import CredentialStore
from .services.password_hashing import WerkzeugPasswordHasher
from .services.post_store import PostStore
from .services.session_manager import SessionManager
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CredentialStore",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "PostStore",
    "RegisterUserUseCase",
    "SessionManager",
    "WerkzeugPasswordHasher",
]
