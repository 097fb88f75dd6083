# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac
import secrets
from collections.abc import Callable
from functools import wraps

from flask import Flask, current_app, jsonify, request

from msgboard.shared.config import SecurityConfig

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def _is_enabled() -> bool:
    return bool(current_app.config.get("CSRF_ENABLED", False))


def configure_csrf(app: Flask, security: SecurityConfig) -> None:
    app.config["CSRF_ENABLED"] = security.enable_csrf
    if not security.enable_csrf:
        return

    @app.after_request
    def _ensure_csrf_cookie(resp):
        if not request.cookies.get(CSRF_COOKIE, ""):
            resp.set_cookie(
                CSRF_COOKIE,
                secrets.token_urlsafe(32),
                httponly=False,
                samesite=security.cookie_samesite,
                secure=security.cookie_secure,
                max_age=60 * 60 * 24 * 7,
            )
        return resp


def csrf_protect(f: Callable):
    """Double-submit check: the header must echo the csrf cookie."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        if not _is_enabled() or request.method in SAFE_METHODS:
            return f(*args, **kwargs)
        header = (request.headers.get(CSRF_HEADER) or "").strip()
        cookie = (request.cookies.get(CSRF_COOKIE) or "").strip()
        if not header or not cookie or not hmac.compare_digest(header.encode(), cookie.encode()):
            return jsonify({"error": "csrf"}), 403
        return f(*args, **kwargs)

    return wrapper


__all__ = ["configure_csrf", "csrf_protect"]
