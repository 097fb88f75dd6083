# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, g, request

from msgboard.shared.logging import (clear_correlation_id, get_correlation_id,
                                     logger, set_correlation_id)

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-csrf-token"}


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value
    return sanitized


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:

    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_urlsafe(8))
        g.request_start_time = time.perf_counter()

        if debug_mode:
            logger.info(
                f"Request started: {request.method} {request.path} "
                f"from {_get_client_ip()}, query={dict(request.args)}, "
                f"headers={_sanitize_headers(dict(request.headers))}, "
                f"body_size={len(request.get_data(cache=True))}"
            )

    @app.after_request
    def _after_request(response):
        start = getattr(g, "request_start_time", time.perf_counter())
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            f"{request.method} {request.path} -> {response.status_code} "
            f"in {duration_ms:.1f} ms from {_get_client_ip()} "
            f"user={getattr(g, 'username', None) or '-'}"
        )
        response.headers.setdefault("X-Request-ID", get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path}"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
