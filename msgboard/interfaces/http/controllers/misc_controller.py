# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, current_app, jsonify

from msgboard.shared.logging import logger


class MiscController:
    def __init__(self, *, storage_name: str, storage_check: Callable[[], None]) -> None:
        self._storage_name = storage_name
        self._storage_check = storage_check

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def index(self):
        if current_app.static_folder and current_app.has_static_folder:
            return current_app.send_static_file("index.html")
        return jsonify({"service": "msgboard", "storage": self._storage_name})

    def health(self):
        status: dict[str, object] = {"ok": True, "backend": self._storage_name}
        try:
            self._storage_check()
            status["storage"] = "ok"
        except Exception as exc:
            logger.error(f"health: storage check failed: {type(exc).__name__}")
            status["ok"] = False
            status["storage"] = "error"
            return jsonify(status), 503
        return jsonify(status), 200
