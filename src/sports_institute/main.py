from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .billing.controller import register as register_billing
from .checkins.controller import register as register_checkins
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_IDLE_LOGOUT_MINUTES
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_demo_members, list_tables
from .database.connection import DBConfig
from .members.controller import register as register_members
from .schedules.controller import register as register_schedules

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the dashboard app.

    Pass `container` to run against pre-wired (e.g. in-memory) repositories;
    otherwise MySQL repositories are built from the settings' DB_CONFIG.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["IDLE_LOGOUT_MINUTES"] = int(getattr(settings, "IDLE_LOGOUT_MINUTES", DEFAULT_IDLE_LOGOUT_MINUTES))
    app.config["ATTENDANCE_POLICY"] = getattr(settings, "ATTENDANCE_POLICY", "upsert")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.info("settings=%s db=%s", settings_module, DBConfig.from_settings(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            app.logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_members(db_config)
            app.logger.info("Demo members ready")
        container = build_container(db_config=db_config, attendance_policy=app.config["ATTENDANCE_POLICY"])

    register_dashboard(app, container)
    register_members(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_checkins(app, container)
    register_billing(app, container)

    return app
