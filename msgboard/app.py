# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from msgboard.container import Container
from msgboard.shared.config import AppConfig, load_config
from msgboard.shared.logging import logger, setup_logging
from msgboard.shared.middleware.csrf import configure_csrf
from msgboard.shared.middleware.error_handler import configure_error_handling
from msgboard.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, config.log_file)

    container = container or Container(config)
    container.init_storage()

    static_folder = str(config.static_dir.resolve()) if config.static_dir else None
    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app.json.ensure_ascii = False
    app.extensions["msgboard"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_csrf(app, config.security)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.posts_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized storage={container.backend} env={config.app_env}")
    return app


if __name__ == "__main__":
    _config = load_config()
    create_app(_config).run(host=_config.host, port=_config.port, debug=False, threaded=True)
