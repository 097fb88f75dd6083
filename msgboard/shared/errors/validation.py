# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Keep the field path and error type of each problem; drop the input
    values so secrets never travel back in a 400."""

    errors = [
        {"field": _field_path(err["loc"]), "type": err["type"]}
        for err in exc.errors(include_url=False, include_input=False)
    ]
    fields = sorted({e["field"] for e in errors})
    return ValidationError(fields, errors)


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise to_validation_error(exc) from exc


__all__ = ["parse_model", "to_validation_error"]
