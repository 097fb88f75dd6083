# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import (Base, check_database, create_db_engine,
                      create_session_factory, init_db)

__all__ = [
    "Base",
    "check_database",
    "create_db_engine",
    "create_session_factory",
    "init_db",
]
