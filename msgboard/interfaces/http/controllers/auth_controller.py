# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from msgboard.application.services.session_manager import SessionManager
from msgboard.application.use_cases.users.login_user import LoginUserUseCase
from msgboard.application.use_cases.users.logout_user import LogoutUserUseCase
from msgboard.application.use_cases.users.register_user import \
    RegisterUserUseCase
from msgboard.interfaces.http.auth import (clear_session_cookie, client_ip,
                                           read_session_token, require_user,
                                           set_session_cookie)
from msgboard.interfaces.http.dto.auth import (AuthSuccessDTO,
                                               CredentialsRequestDTO,
                                               CurrentUserDTO, MessageDTO)
from msgboard.shared.config import SecurityConfig
from msgboard.shared.errors.validation import parse_model
from msgboard.shared.logging import logger
from msgboard.shared.middleware.csrf import csrf_protect


def _credentials_from_request() -> CredentialsRequestDTO:
    return parse_model(CredentialsRequestDTO, request.get_json(silent=True) or {})


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        sessions: SessionManager,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._sessions = sessions
        self._security = security

    def register(self) -> tuple[Response, int]:
        dto = _credentials_from_request()

        user, session = self._register_use_case.execute(dto.username, dto.secret)

        response = jsonify(AuthSuccessDTO(username=user.username).model_dump())
        set_session_cookie(response, session, self._security)
        logger.info(f"auth.register: ok username={user.username} ip={client_ip()}")
        return response, 200

    def login(self) -> tuple[Response, int]:
        dto = _credentials_from_request()

        session = self._login_use_case.execute(dto.username, dto.secret, client_ip())

        response = jsonify(AuthSuccessDTO(username=session.username).model_dump())
        set_session_cookie(response, session, self._security)
        logger.info(f"auth.login: ok username={session.username}")
        return response, 200

    @csrf_protect
    def logout(self) -> tuple[Response, int]:
        token = read_session_token(self._security.session_cookie_name)

        username = self._logout_use_case.execute(token)

        response = jsonify(MessageDTO(message="logged out").model_dump())
        clear_session_cookie(response, self._security)
        logger.info(f"auth.logout: ok username={username or '-'}")
        return response, 200

    def me(self) -> tuple[Response, int]:
        username = require_user(self._sessions, self._security)
        return jsonify(CurrentUserDTO(username=username).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
