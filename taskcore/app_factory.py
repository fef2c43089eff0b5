"""Flask application factory.

Provides:
 - App factory with configuration override (dataclass keys or Flask keys)
 - DB engine initialization
 - Request logging + X-Request-Id, CORS allow-list
 - Principal resolution before every request
 - Unified JSON failure envelope {success: false, message, ...}
 - Blueprint registration under /api/v1 and the legacy /api prefix
"""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify

from .account_api import bp as account_bp
from .admin_api import bp as admin_bp
from .app_sessions import load_principal
from .config import Config
from .db import create_all, init_engine
from .errors import register_error_handlers
from .logging_setup import install_request_logging
from .security import init_security
from .tasks_api import bp as tasks_bp

API_VERSION = "1.0.0"

# (blueprint, path below the API root)
BLUEPRINTS = (
    (account_bp, "/auth"),
    (admin_bp, "/admin"),
    (tasks_bp, "/tasks"),
)
API_PREFIXES = (
    ("/api/v1", ""),
    ("/api", "_legacy"),  # kept for clients predating versioned routes
)


def create_app(config_override: dict[str, Any] | None = None) -> Flask:
    load_dotenv()
    app = Flask(__name__)
    # --- Configuration ---
    cfg = Config.from_env()
    if config_override:
        known = {k: v for k, v in config_override.items() if hasattr(cfg, k)}
        if known:
            cfg.override(known)
    # Default sqlite file lives in the instance folder unless DATABASE_URL was given
    if not os.getenv("DATABASE_URL") and not (config_override or {}).get("database_url"):
        os.makedirs(app.instance_path, exist_ok=True)
        cfg.database_url = f"sqlite:///{os.path.join(app.instance_path, 'dev.db')}"
    app.config.update(cfg.to_flask_dict())
    for k, v in (config_override or {}).items():  # also allow direct Flask config keys
        if k.isupper():
            app.config[k] = v

    if app.config.get("TESTING") or cfg.is_development:
        app.logger.setLevel(logging.DEBUG)

    # --- DB setup ---
    init_engine(cfg.database_url, force=bool(app.config.get("FORCE_DB_REINIT")))
    if app.config.get("CREATE_ALL") or os.getenv("DEV_CREATE_ALL", "0") == "1":
        create_all()
    app.logger.info("DB_URL=%s", cfg.database_url)

    # --- Middleware ---
    install_request_logging(app)
    init_security(app)

    @app.before_request
    def _resolve_principal() -> None:
        load_principal()

    register_error_handlers(app)

    @app.get("/")
    def index():
        return jsonify({"message": "Welcome to the Task API", "version": API_VERSION})

    for root, suffix in API_PREFIXES:
        for bp, path in BLUEPRINTS:
            app.register_blueprint(bp, url_prefix=f"{root}{path}", name=f"{bp.name}{suffix}")
    return app


__all__ = ["create_app", "API_VERSION"]
