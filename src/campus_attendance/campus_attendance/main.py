from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import build_container
from .core.constants import APP_EXTENSION_KEY, DEFAULT_SESSION_HOURS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .leaves.controller import register as register_leaves
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users
from .users.service import DEFAULT_HASH_METHOD

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORE_BACKEND",
    "DB_CONFIG",
    "LOG_LEVEL",
    "SESSION_LIFETIME_HOURS",
    "PASSWORD_HASH_METHOD",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
)


def _load_settings(overrides: Optional[dict]) -> tuple[str, dict]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in _SETTING_NAMES if hasattr(module, name)}
    settings.update(overrides or {})
    return settings_module, settings


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    settings_module, settings = _load_settings(overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.permanent_session_lifetime = timedelta(hours=int(settings.get("SESSION_LIFETIME_HOURS", DEFAULT_SESSION_HOURS)))

    backend = str(settings.get("STORE_BACKEND", "memory")).lower()
    container = build_container(
        backend=backend,
        db_config=settings.get("DB_CONFIG"),
        password_hash_method=settings.get("PASSWORD_HASH_METHOD", DEFAULT_HASH_METHOD),
    )
    logger.info("settings=%s backend=%s", settings_module, backend)

    if settings.get("AUTO_INIT_DB") and container.conn is not None:
        apply_schema(container.conn, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
    if settings.get("AUTO_SEED_DB"):
        if seed_demo_data(container):
            logger.info("demo seed ready")

    app.extensions[APP_EXTENSION_KEY] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_schedules(app, container)
    register_leaves(app, container)
    register_dashboard(app, container)

    return app
