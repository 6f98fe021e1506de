from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

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
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            history_limit=int(getattr(settings, "HISTORY_LIMIT", 30)),
        )

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_leave(app, container)

    return app
