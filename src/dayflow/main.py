from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .settings import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .company.controller import register as register_company
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import db_config_from_dict
from .errors import register_error_handlers
from .leave.controller import register as register_leave
from .log_config import configure_logging
from .payroll.controller import register as register_payroll
from .users.controller import register as register_employees

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
            config = db_config_from_dict(db_config)
            apply_schema(config)
            logger.info("schema ready (tables=%d)", len(list_tables(config)))

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", 24)),
        )

    app.extensions["dayflow"] = container
    register_error_handlers(app)

    register_auth(app, container)
    register_company(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "message": "Dayflow HRMS API is running"})

    return app


if __name__ == "__main__":
    import os

    create_app().run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
