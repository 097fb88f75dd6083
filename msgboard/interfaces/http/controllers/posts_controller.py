# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from msgboard.application.services.post_store import PostStore
from msgboard.application.services.session_manager import SessionManager
from msgboard.interfaces.http.auth import require_user
from msgboard.interfaces.http.dto.posts import (CreatePostRequestDTO,
                                                ListPostsQueryDTO,
                                                PostCreatedDTO, PostDTO)
from msgboard.shared.config import SecurityConfig
from msgboard.shared.errors.validation import parse_model
from msgboard.shared.middleware.csrf import csrf_protect


class PostsController:
    def __init__(
        self,
        *,
        posts: PostStore,
        sessions: SessionManager,
        security: SecurityConfig,
    ) -> None:
        self._posts = posts
        self._sessions = sessions
        self._security = security

    def list_posts(self) -> tuple[Response, int]:
        query = parse_model(ListPostsQueryDTO, request.args.to_dict())

        posts = self._posts.list_recent(query.limit)
        payload = [
            PostDTO.from_domain(post).model_dump(mode="json", by_alias=True) for post in posts
        ]
        return jsonify(payload), 200

    @csrf_protect
    def create_post(self) -> tuple[Response, int]:
        # The author always comes from the session, never from the body.
        author = require_user(self._sessions, self._security)
        dto = parse_model(CreatePostRequestDTO, request.get_json(silent=True) or {})

        self._posts.append(author, dto.content)
        return jsonify(PostCreatedDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__, url_prefix="/api")
        bp.add_url_rule("/posts", view_func=self.list_posts, methods=["GET"])
        bp.add_url_rule("/posts", view_func=self.create_post, methods=["POST"])
        return bp
