from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .dashboards.controller import register as register_dashboards
from .dashboards.display import JINJA_FILTERS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_profiles, list_tables
from .leaves.controller import register as register_leaves
from .logging_setup import init_request_logging, setup_logging
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .tasks.controller import register as register_tasks

log = structlog.get_logger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass ``container`` to run over in-memory repositories."""
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.jinja_env.filters.update(JINJA_FILTERS)
    init_request_logging(app)

    if container is None:
        log.info(
            "app_starting",
            settings=settings_module,
            db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            log.info("schema_ready", tables=len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_profiles(db_config)
            log.info("demo_seed_ready")
        container = build_container(db_config=db_config)

    register_profiles(app, container)
    register_dashboards(app, container)
    register_leaves(app, container)
    register_tasks(app, container)
    register_reports(app, container)
    register_attendance(app, container)

    return app
