from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_STAFF_CODE_PREFIX
from .database.bootstrap import apply_schema, list_tables
from .exports.controller import register as register_exports
from .imports.controller import register as register_imports
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask app. Tests may pass a prebuilt container of fakes."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", DEFAULT_MAX_UPLOAD_BYTES))
    app.config["UPLOAD_FOLDER"] = getattr(settings, "UPLOAD_FOLDER", None)
    app.config["ACCOUNTING_YEAR"] = getattr(settings, "ACCOUNTING_YEAR", None)

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
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            upload_folder=app.config["UPLOAD_FOLDER"],
            staff_code_prefix=getattr(settings, "STAFF_CODE_PREFIX", DEFAULT_STAFF_CODE_PREFIX),
        )

    register_imports(app, container)
    register_exports(app, container)
    register_reports(app, container)

    return app
