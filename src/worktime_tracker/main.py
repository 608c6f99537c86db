from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .common.http import register_error_handlers
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_employees, list_tables
from .productivity.controller import register as register_productivity
from .reports.controller import register as register_reports
from .tracking.controller import register as register_tracking

logger = logging.getLogger(__name__)

LOGGING_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _configure_logging(level: str) -> None:
    # No-op when the host (gunicorn, pytest) already configured the root logger.
    logging.basicConfig(level=level.upper(), format=LOGGING_FORMAT)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        store_backend = getattr(settings, "STORE_BACKEND", "mysql")
        logger.info(
            "settings=%s store=%s db=%s@%s:%s/%s",
            settings_module,
            store_backend,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if store_backend == "mysql":
            if getattr(settings, "AUTO_INIT_DB", False):
                apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
                logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
            if getattr(settings, "AUTO_SEED_DB", False):
                apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
                ensure_demo_employees(db_config)
                logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            store_backend=store_backend,
            week_start=int(getattr(settings, "WEEK_START", 0)),
            default_weekly_target_hours=int(getattr(settings, "DEFAULT_WEEKLY_TARGET_HOURS", 40)),
        )

    app.extensions["worktime_container"] = container

    register_error_handlers(app)
    register_tracking(app, container)
    register_productivity(app, container)
    register_reports(app, container)

    return app
