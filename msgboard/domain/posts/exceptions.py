# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from msgboard.shared.errors.base import DomainError


class EmptyContentError(DomainError):
    default_code = "empty_content"
