"""loguru setup: correlation ids per request, redaction before any sink."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger

from .sensitive_filter import redact_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"].setdefault("correlation_id", _correlation_id.get())
    redact_record(record)


logger.configure(patcher=_patch_record)


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (werkzeug, sqlalchemy) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller, not the logging module.
        frame, depth = logging.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    logger.remove()
    sink_options: dict[str, Any] = {
        "level": level,
        "format": _FORMAT,
        "backtrace": False,
        "diagnose": False,
    }
    logger.add(sys.stderr, colorize=True, **sink_options)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_file), colorize=False, enqueue=True, encoding="utf-8", **sink_options)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, stdlib_level in (("werkzeug", logging.INFO), ("sqlalchemy.engine", logging.WARNING)):
        logging.getLogger(name).setLevel(stdlib_level)


__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
