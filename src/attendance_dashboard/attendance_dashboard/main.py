from __future__ import annotations

import importlib
import logging
from types import SimpleNamespace
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.logging_utils import configure_logging
from .container import build_container
from .core.constants import SESSION_COOKIE_NAME
from .core.exceptions import DomainError
from .periods.controller import register as register_periods
from .students.controller import register as register_students
from .students.service import configure_collation
from .timetracking.client import TimeTrackingClient

logger = logging.getLogger(__name__)


def load_settings(overrides: Optional[dict[str, Any]] = None) -> SimpleNamespace:
    """Settings module selected by APP_ENV, with optional overrides applied on top."""
    module = importlib.import_module(get_settings_module())
    values = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    values.update(overrides or {})
    return SimpleNamespace(**values)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500


def create_app(
    overrides: Optional[dict[str, Any]] = None,
    *,
    client_factory: Optional[Callable[[], TimeTrackingClient]] = None,
) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    configure_collation()

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY", "") or None
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_NAME"] = SESSION_COOKIE_NAME
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SECURE_COOKIES", False))

    container = build_container(settings, client_factory=client_factory)
    logger.info(
        "settings=%s roster=%s groups=%d",
        get_settings_module(), container.document_store.root, sum(1 for p in container.periods if p.group_id),
    )

    register_error_handlers(app)
    register_auth(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_periods(app, container)

    return app
