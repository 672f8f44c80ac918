# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit

from flask import Flask
from flask_cors import CORS

from dashguard.infrastructure.container import Container
from dashguard.infrastructure.db import Database
from dashguard.interfaces.http.gate import configure_auth_gate
from dashguard.shared.config import AppConfig, load_config
from dashguard.shared.logging import logger, setup_logging
from dashguard.shared.middleware.error_handler import configure_error_handling
from dashguard.shared.middleware.request_logger import configure_request_logging

EXTENSION_KEY = "dashguard"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging("DEBUG" if config.debug_logging else config.log_level)

    database = Database(config.database).open()
    atexit.register(database.close)
    container = Container(config=config, database=database)
    container.bootstrap.run()

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_auth_gate(
        app,
        gate=container.auth_gate,
        sessions=container.session_store,
        cookie_name=config.session.cookie_name,
        sweep_probability=config.session.sweep_probability,
    )

    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions[EXTENSION_KEY] = container

    cors_kwargs: dict[str, object] = {
        "resources": {rf"{config.gate.api_prefix}*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.pages_controller.as_blueprint())

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
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
