# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from flask import Response, g, request

from msgboard.application.services.session_manager import SessionManager
from msgboard.domain.users.entities import SessionToken
from msgboard.shared.config import SecurityConfig
from msgboard.shared.logging import logger


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def read_session_token(cookie_name: str) -> str | None:
    """Bearer header first, then the session cookie."""

    auth = request.headers.get("Authorization", "")
    token = ""
    if auth.startswith("Bearer "):
        token = auth[7:].strip()
    if not token:
        token = request.cookies.get(cookie_name, "")
    return token or None


def require_user(sessions: SessionManager, security: SecurityConfig) -> str:
    """Resolve the caller or raise UnauthorizedError (401)."""

    token = read_session_token(security.session_cookie_name)
    if not token:
        logger.warning(
            f"No session token on {request.method} {request.path} from {client_ip()}"
        )
    username = sessions.require_authenticated(token)
    g.username = username
    return username


def set_session_cookie(response: Response, session: SessionToken, security: SecurityConfig) -> None:
    max_age = None
    if session.expires_at is not None:
        max_age = max(int((session.expires_at - datetime.now(UTC)).total_seconds()), 0)
    response.set_cookie(
        security.session_cookie_name,
        session.token,
        httponly=True,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
        max_age=max_age,
    )


def clear_session_cookie(response: Response, security: SecurityConfig) -> None:
    response.delete_cookie(
        security.session_cookie_name,
        httponly=True,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
    )
