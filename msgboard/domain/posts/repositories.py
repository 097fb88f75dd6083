# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Post


class PostRepository(Protocol):
    def append(self, post: Post) -> Post: ...

    def list_recent(self, limit: int | None) -> Sequence[Post]:
        """Newest first; ``None`` returns every post."""
        ...
