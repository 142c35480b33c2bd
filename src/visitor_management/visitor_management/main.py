from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .common.log import configure_logging, install_exception_hooks
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .hosts.controller import register as register_hosts
from .lookups.controller import register as register_lookups
from .settings.controller import register as register_settings
from .statistics.controller import register as register_statistics
from .system.controller import register as register_system
from .visitors.controller import register as register_visitors

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    install_exception_hooks()

    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    origins = list(getattr(settings, "ALLOWED_ORIGINS", []))
    CORS(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")

        container = build_container(
            db_config=db_config,
            keep_alive_seconds=int(getattr(settings, "KEEP_ALIVE_INTERVAL")),
            health_check_seconds=int(getattr(settings, "HEALTH_CHECK_INTERVAL")),
        )
        if bool(getattr(settings, "START_MONITOR", True)):
            container.monitor.start()

    app.extensions["visitor_container"] = container

    register_system(app, container)
    register_visitors(app, container)
    register_hosts(app, container)
    register_lookups(app, container)
    register_settings(app, container)
    register_statistics(app, container)

    return app
