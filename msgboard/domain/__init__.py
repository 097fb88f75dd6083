# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .posts.entities import Post
from .posts.exceptions import EmptyContentError
from .users.entities import SessionToken, User
from .users.exceptions import (DuplicateUsernameError, InvalidCredentialsError,
                               InvalidInputError, UnauthorizedError,
                               UnknownUserError, WrongSecretError)

__all__ = [
    "Post",
    "SessionToken",
    "User",
    "DuplicateUsernameError",
    "EmptyContentError",
    "InvalidCredentialsError",
    "InvalidInputError",
    "UnauthorizedError",
    "UnknownUserError",
    "WrongSecretError",
]
