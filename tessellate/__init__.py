"""
Tessellate Projects
Flask Application Factory.

Usage:
    from tessellate import create_app
    app = create_app()           # defaults to APP_ENV or "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

import click
from flask import Flask, abort, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event
from werkzeug.exceptions import HTTPException

from tessellate.config import config
from tessellate.core.exceptions import AuthError, NotFoundError, StoreError, ValidationError
from tessellate.middleware.diagnostics import run_startup_diagnostics
from tessellate.middleware.logging_config import configure_logging
from tessellate.middleware.rate_limiter import init_rate_limits
from tessellate.middleware.timing import init_request_timing
from tessellate.models import db
from tessellate.utils.errors import api_error, exception_response

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement so ON DELETE rules apply on SQLite."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # no global limit; login only
    storage_uri=os.getenv("RATELIMIT_STORAGE_URI", "memory://"),
)

API_COLLECTIONS = ("projects", "users", "clients", "requirements", "audit-tasks", "issues")


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: One of "development", "testing", "production".
                     Defaults to the APP_ENV env var, or "development".

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name]())
    os.makedirs(app.instance_path, exist_ok=True)

    # ── Logging (must be first) ──────────────────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Request guards (input length + Content-Type) ─────────────────────
    @app.before_request
    def _guard_request():
        max_len = app.config.get("MAX_CONTENT_LENGTH")
        if max_len and request.content_length and request.content_length > max_len:
            abort(413, description="Request body too large")
        if request.method in ("POST", "PUT", "PATCH") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if "json" not in ct and "multipart/form-data" not in ct and request.data:
                abort(415, description="Content-Type must be application/json")

    # ── Import all models so create_all / Alembic see them ───────────────
    from tessellate.models import audit as _audit_models              # noqa: F401
    from tessellate.models import auth as _auth_models                # noqa: F401
    from tessellate.models import client as _client_models            # noqa: F401
    from tessellate.models import project as _project_models          # noqa: F401
    from tessellate.models import requirement as _requirement_models  # noqa: F401

    # ── Schema + demo data ───────────────────────────────────────────────
    with app.app_context():
        db.create_all()
        app.logger.info("db.create_all() completed successfully")

        if app.config.get("SEED_ON_STARTUP"):
            from tessellate.services.seed_service import seed_if_empty
            seeded = [table for table, inserted in seed_if_empty().items() if inserted]
            app.logger.info("Startup seed: %s", ", ".join(seeded) or "nothing to do")

    # ── Blueprints ───────────────────────────────────────────────────────
    from tessellate.blueprints.audit_bp import audit_bp
    from tessellate.blueprints.auth_bp import auth_bp
    from tessellate.blueprints.bulk_import_bp import bulk_import_bp
    from tessellate.blueprints.client_bp import client_bp
    from tessellate.blueprints.health_bp import health_bp
    from tessellate.blueprints.project_bp import project_bp
    from tessellate.blueprints.requirement_bp import requirement_bp
    from tessellate.blueprints.user_bp import user_bp

    app.register_blueprint(project_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(requirement_bp)
    app.register_blueprint(audit_bp)
    app.register_blueprint(bulk_import_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(health_bp)

    init_rate_limits(app, limiter)

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed")
    def seed_cmd():
        """Insert demo rows into every table that is still empty."""
        from tessellate.services.seed_service import seed_if_empty
        result = seed_if_empty()
        for table, inserted in result.items():
            click.echo(f"{table:<14} {'seeded' if inserted else 'skipped'}")

    # ── API index ────────────────────────────────────────────────────────
    @app.route("/api/v1")
    def api_index():
        return jsonify({
            "name": "Tessellate Projects API",
            "version": "v1",
            "collections": [f"/api/v1/{c}" for c in API_COLLECTIONS],
        })

    register_error_handlers(app)
    run_startup_diagnostics(app)

    return app


def register_error_handlers(app):
    """Render every failure as ``{error, message?, code}``."""

    @app.errorhandler(ValidationError)
    @app.errorhandler(NotFoundError)
    @app.errorhandler(AuthError)
    def handle_client_error(e):
        return exception_response(e)

    @app.errorhandler(StoreError)
    def handle_store_error(e):
        logger.error("Store error on %s %s: %s", request.method, request.path, e.error)
        return exception_response(e)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return api_error(e.code, e.name, message=e.description if e.code in (413, 415) else None)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return api_error(500, "Internal server error")
