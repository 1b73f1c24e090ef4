from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_jwt_extended import JWTManager

from config import get_settings_module

from .common.api import register_error_handlers, register_jwt_handlers
from .common.datetime_utils import now_local
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_TTL_MINUTES
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .files.controller import register as register_files
from .notifications.controller import register as register_notifications
from .stats.controller import register as register_stats
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` lets callers (tests, scripts) supply pre-wired services;
    otherwise the MySQL-backed container is built from the active settings.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["JWT_SECRET_KEY"] = getattr(settings, "JWT_SECRET_KEY")
    app.config["JWT_TOKEN_LOCATION"] = ["headers", "cookies"]
    app.config["JWT_COOKIE_SECURE"] = bool(getattr(settings, "JWT_COOKIE_SECURE", False))
    app.config["JWT_COOKIE_CSRF_PROTECT"] = bool(getattr(settings, "JWT_COOKIE_CSRF_PROTECT", True))
    token_ttl_minutes = int(getattr(settings, "TOKEN_TTL_MINUTES", DEFAULT_TOKEN_TTL_MINUTES))

    register_jwt_handlers(JWTManager(app))
    register_error_handlers(app)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
        container = build_container(db_config=db_config, token_ttl_minutes=token_ttl_minutes)

    register_users(app, container)
    register_files(app, container)
    register_notifications(app, container)
    register_stats(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": now_local().isoformat()})

    return app
