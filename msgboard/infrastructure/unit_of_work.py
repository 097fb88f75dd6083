# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""One transaction per repository call."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from msgboard.shared.errors import StorageError
from msgboard.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """Commit on clean exit, roll back otherwise.

    ``IntegrityError`` propagates untouched so repositories can map it to a
    domain error; any other driver failure leaves as ``StorageError``.
    """

    session_factory: Callable[[], Session]
    operation: str
    _session: Session | None = field(default=None, init=False)

    def __enter__(self) -> Session:
        try:
            self._session = self.session_factory()
        except SQLAlchemyError as exc:
            raise StorageError(self.operation) from exc
        return self._session

    def __exit__(self, exc_type, exc, tb) -> bool:
        session, self._session = self._session, None
        assert session is not None
        try:
            if exc is None:
                session.commit()
            else:
                logger.debug(f"uow[{self.operation}]: rollback after {exc_type.__name__}")
                session.rollback()
        except IntegrityError:
            raise
        except SQLAlchemyError as db_exc:
            raise StorageError(self.operation) from db_exc
        finally:
            session.close()

        if isinstance(exc, SQLAlchemyError) and not isinstance(exc, IntegrityError):
            raise StorageError(self.operation) from exc
        return False
