from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.log import configure_logging
from .container import Container, build_container
from .core.result import fail, to_envelope
from .database.bootstrap import apply_schema, ensure_database_exists, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .profiles.controller import register as register_profiles
from .tokens.controller import register as register_tokens
from .tokens.jwt_tokens import TokenIssuer
from .tokens.service import TokenAuthService
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def _prepare_database(settings: ModuleType, container: Container) -> None:
    database_url = getattr(settings, "DATABASE_URL", None)
    if getattr(settings, "AUTO_INIT_DB", False):
        if not database_url:
            ensure_database_exists(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        apply_schema(container.db)
        logger.info("schema ready (tables=%d)", len(list_tables(container.db)))
    if getattr(settings, "AUTO_SEED_DB", False):
        ensure_demo_users(container.db)


def _container_from(settings: ModuleType) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG", None),
        database_url=getattr(settings, "DATABASE_URL", None),
        session_days=int(getattr(settings, "SESSION_DAYS", 7)),
        session_refresh_hours=int(getattr(settings, "SESSION_REFRESH_HOURS", 24)),
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify(to_envelope(fail(e.description or e.name))), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e: Exception):
        logger.exception("unhandled error")
        return jsonify(to_envelope(fail("Internal server error"))), 500


def create_app(container: Optional[Container] = None) -> Flask:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", 7)))

    if container is None:
        container = _container_from(settings)
        _prepare_database(settings, container)
    app.extensions["dayflow"] = container

    logger.debug("settings=%s", settings.__name__)

    register_auth(app, container)
    register_users(app, container)
    register_profiles(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_employees(app, container)
    register_admin(app, container)
    _register_error_handlers(app)

    return app


def create_token_app(container: Optional[Container] = None) -> Flask:
    """Standalone bearer-token auth service; shares the database, not the sessions."""

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        container = _container_from(settings)
        _prepare_database(settings, container)

    issuer = TokenIssuer(
        getattr(settings, "JWT_SECRET"),
        session_ttl=timedelta(days=int(getattr(settings, "SESSION_DAYS", 7))),
    )
    service = TokenAuthService(
        container.users_repo,
        container.profiles_repo,
        container.accounts_repo,
        container.employees_repo,
        issuer,
    )
    app.extensions["dayflow"] = container
    register_tokens(app, service)
    _register_error_handlers(app)
    return app
