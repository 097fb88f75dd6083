# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from msgboard.shared.errors.base import DomainError


class InvalidInputError(DomainError):
    default_code = "invalid_input"


class DuplicateUsernameError(DomainError):
    default_code = "duplicate_username"
    default_status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    default_code = "invalid_credentials"


# Both surface as ``invalid_credentials`` so clients cannot probe for usernames.
class UnknownUserError(InvalidCredentialsError):
    pass


class WrongSecretError(InvalidCredentialsError):
    pass


class UnauthorizedError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED
