# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os

from sqlalchemy.engine import Engine

from msgboard.infrastructure.db import check_database
from msgboard.shared.config import StorageConfig


def check_storage(storage: StorageConfig, engine: Engine | None = None) -> None:
    """Raise if the configured backend cannot serve requests."""

    if storage.backend == "sql":
        assert engine is not None
        check_database(engine)
    elif storage.backend == "json":
        data_dir = storage.data_dir
        if not data_dir.is_dir() or not os.access(data_dir, os.W_OK):
            raise OSError(f"data directory {data_dir} is not writable")


__all__ = ["check_storage"]
