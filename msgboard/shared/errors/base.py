# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error hierarchy shared by every layer.

Each error carries a stable wire ``code`` and an HTTP ``status``. The JSON body
is ``{"error": code}``, plus ``"context"`` when the class exposes it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    expose_context: ClassVar[bool] = True

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        if self.context and self.expose_context:
            return {"error": self.code, "context": dict(self.context)}
        return {"error": self.code}


class DomainError(AppError):
    """Expected failure caused by the caller's input or state."""

    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(code=cls.default_code, status=cls.default_status, context=context)


class InfrastructureError(AppError):
    # Internal details stay in the logs.
    expose_context = False

    def __init__(self, code: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(code=code, status=HTTPStatus.INTERNAL_SERVER_ERROR, context=context)


class StorageError(InfrastructureError):
    """The backing store (database, files) failed; nothing was committed."""

    def __init__(self, operation: str) -> None:
        super().__init__("storage_error", context={"operation": operation})

    @property
    def operation(self) -> str:
        return str((self.context or {}).get("operation", "unknown"))


class ValidationError(AppError):
    """Request body or query does not match its schema."""

    def __init__(self, fields: list[str], errors: list[dict[str, Any]]) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.BAD_REQUEST,
            context={"fields": fields, "errors": errors},
        )
