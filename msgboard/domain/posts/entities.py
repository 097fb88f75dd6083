# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Post:
    """Immutable board message; ``author`` is a copy of the poster's username."""

    author: str
    content: str
    created_at: datetime
    id: int | None = None
