from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import fail
from .common.log_config import configure_logging
from .container import Container, build_container
from .core.exceptions import AuthenticationError, ConflictError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .timetable.controller import register as register_timetable
from .timetable.loader import load_rotations, load_timetable
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]
HEALTH_TEXT = "Student Attendance Tracker API is running"

_ERROR_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        for exc_type, status in _ERROR_STATUS:
            if isinstance(err, exc_type):
                return fail(str(err), status)
        return fail(str(err), 400)

    @app.errorhandler(404)
    def handle_not_found(_err):
        return fail(f"Route {request.method} {request.path} not found", 404)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return fail(err.description or err.name, err.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500, error=str(err) if app.config["DEBUG"] else None)


def _container_from_settings(settings, app: Flask) -> Container:
    db_config = dict(getattr(settings, "DB_CONFIG"))
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    logger.info("Database target: %s", conn.config.describe())

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(conn)))

    days = load_timetable(getattr(settings, "TIMETABLE_PATH"))
    rotations = load_rotations(getattr(settings, "ROTATIONS_PATH"))
    logger.info("Timetable loaded: %d days, %d clinical periods", len(days), len(rotations.clinical_postings))

    return build_container(
        db_config=db_config,
        secret_key=app.secret_key,
        days=days,
        rotations=rotations,
        token_days=int(getattr(settings, "TOKEN_EXPIRY_DAYS", 7)),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    logger.info("Starting with settings=%s", settings_module)

    CORS(app, origins=list(getattr(settings, "ALLOWED_ORIGINS", [])), supports_credentials=True)

    if container is None:
        container = _container_from_settings(settings, app)

    @app.route("/", methods=["GET"], endpoint="health")
    def health():
        return HEALTH_TEXT

    register_users(app, container)
    register_attendance(app, container)
    register_timetable(app, container)
    _register_error_handlers(app)

    return app
