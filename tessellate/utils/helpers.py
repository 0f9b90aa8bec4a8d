"""Shared utility functions.

parse_id:         path/query id strings -> int, ValidationError on bad input
commit_or_raise:  commit the session, roll back and raise StoreError on failure
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tessellate.core.exceptions import StoreError, ValidationError
from tessellate.models import db

logger = logging.getLogger(__name__)


MAX_ID = 2**32 - 1


def parse_id(value, label):
    """Parse an entity id taken from a URL segment or query string.

    Only unsigned decimal integers up to ``MAX_ID`` are accepted, written
    with ASCII digits, so "-1", "1.5", "abc" and "²" all fail the same way::

        parse_id("12", "project")   # -> 12
        parse_id("x", "project")    # ValidationError("Invalid project ID")
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= MAX_ID:
            raise ValidationError(f"Invalid {label} ID")
        return value
    text = str(value or "").strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f"Invalid {label} ID")
    number = int(text)
    if number > MAX_ID:
        raise ValidationError(f"Invalid {label} ID")
    return number


# ── Database commit helper ───────────────────────────────────────────────────

def commit_or_raise(error_message):
    """Commit the current SQLAlchemy session.

    On any database error the session is rolled back and a ``StoreError``
    carrying ``error_message`` is raised; the driver error is only logged.

    Usage::

        db.session.add(project)
        commit_or_raise("Failed to create project")
    """
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Integrity error on commit: %s", exc.orig)
        raise StoreError(error_message) from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error on commit")
        raise StoreError(error_message) from exc
