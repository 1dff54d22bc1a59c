from __future__ import annotations

import importlib
import logging
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .deadlines.controller import register as register_deadlines
from .logging_setup import setup_logging
from .meetings.controller import register as register_meetings
from .progress.controller import register as register_progress
from .tasks.controller import register as register_tasks

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
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
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    register_tasks(app, container)
    register_deadlines(app, container)
    register_progress(app, container)
    register_meetings(app, container)
    register_cli_commands(app, db_config)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Server is running"

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"message": "Method not allowed"}), 405

    return app


def register_cli_commands(app: Flask, db_config: dict) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create the taskboard tables."""
        apply_schema(db_config)
        click.echo(f"Initialized the database ({len(list_tables(db_config))} tables).")
