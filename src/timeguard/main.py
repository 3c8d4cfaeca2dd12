from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import InternalServerError

from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .attendance.controller import register as register_attendance
from .timesheet.controller import register as register_timesheet
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` replaces the MySQL-backed services (tests pass in-memory ones);
    ``settings_module`` overrides the APP_ENV lookup.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["QR_TOKEN"] = getattr(settings, "QR_TOKEN")
    app.config["IP_LOOKUP"] = getattr(settings, "IP_LOOKUP", "request")
    app.config["IP_LOOKUP_URL"] = getattr(settings, "IP_LOOKUP_URL")
    app.config["IP_LOOKUP_TIMEOUT"] = float(getattr(settings, "IP_LOOKUP_TIMEOUT", 5))
    app.config["TRUST_PROXY_HEADERS"] = bool(getattr(settings, "TRUST_PROXY_HEADERS", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    logger.info("settings=%s", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config, qr_token=app.config["QR_TOKEN"])
        logger.info(
            "db=%s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, DBConfig.from_mapping(db_config))
            logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(container.conn)

    register_users(app, container)
    register_attendance(app, container)
    register_timesheet(app, container)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(InternalServerError)
    def handle_internal_error(e: InternalServerError):
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return app
