"""
Startup diagnostics: checks the database once at startup and logs a summary.
"""

import logging
import sys

from flask import Flask
from sqlalchemy import inspect as sa_inspect

from tessellate.models import db

logger = logging.getLogger(__name__)


def collect_diagnostics(app: Flask) -> dict:
    """Gather the startup checks. Must be called inside an app context."""
    issues: list[str] = []

    db_uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
    db_type = "PostgreSQL" if "postgresql" in db_uri else "SQLite" if "sqlite" in db_uri else "unknown"
    db_status = "ok"
    try:
        db.session.execute(db.text("SELECT 1"))
    except Exception as exc:
        db_status = "FAILED"
        issues.append(f"Database unreachable: {exc}")

    try:
        table_count = len(sa_inspect(db.engine).get_table_names())
        if table_count == 0:
            issues.append("No tables found; run 'flask db upgrade'")
    except Exception:
        table_count = "?"

    return {
        "python": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "database": f"{db_type} ({db_status})",
        "tables": table_count,
        "seed_on_startup": bool(app.config.get("SEED_ON_STARTUP")),
        "issues": issues,
    }


def run_startup_diagnostics(app: Flask):
    """Log the startup summary. Skipped during tests."""
    if app.config.get("TESTING"):
        return

    with app.app_context():
        report = collect_diagnostics(app)

    logger.info(
        "Tessellate Projects starting: python=%s debug=%s database=%s tables=%s seed=%s",
        report["python"], app.debug, report["database"], report["tables"], report["seed_on_startup"],
    )
    for issue in report["issues"]:
        logger.warning("Startup issue: %s", issue)
