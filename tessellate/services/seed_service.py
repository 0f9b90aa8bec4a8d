"""
Demo data seeder.

Each table is seeded independently, and only while it is still empty, in
parent-to-child order. A child row is only written when its parent exists
(the first row of the parent table), so re-running is harmless.

Run automatically at startup when ``SEED_ON_STARTUP`` is set, or on demand
with ``flask seed``.
"""

import logging

from tessellate.models import db
from tessellate.models.audit import AuditTask, Issue
from tessellate.models.auth import ROLE_CONSULTANT, User
from tessellate.models.client import Client
from tessellate.models.project import PROJECT_STATUS_NEW, Project
from tessellate.models.requirement import REQUIREMENT_STATUS_DRAFT, Requirement
from tessellate.services import lifecycle
from tessellate.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)


def _is_empty(model) -> bool:
    return db.session.query(model.id).first() is None


def _first(model):
    return model.query_active().order_by(model.id).first()


def _seed(model, values: dict) -> bool:
    if not _is_empty(model):
        return False
    db.session.add(model(**lifecycle.apply_create_defaults(model, values)))
    commit_or_raise(f"Failed to seed {model.__tablename__}")
    logger.info("Seeded demo %s", model.__tablename__)
    return True


def seed_if_empty() -> dict:
    """Insert the demo rows. Returns ``{table_name: inserted}``."""
    result = {}

    result["clients"] = _seed(Client, {
        "name": "Demo Client Org",
        "industry": "Technology",
        "contact_name": "Jane Doe",
        "contact_email": "jane.doe@example.com",
    })
    client = _first(Client)

    result["users"] = _seed(User, {
        "name": "Alice",
        "email": "alice@example.com",
        "role": ROLE_CONSULTANT,
        "client_id": client.id if client else None,
    })

    result["projects"] = _seed(Project, {
        "name": "Demo Project",
        "client_name": "Demo Client",
        "status": PROJECT_STATUS_NEW,
        "client_id": client.id if client else None,
    })

    project = _first(Project)
    result["requirements"] = project is not None and _seed(Requirement, {
        "project_id": project.id,
        "text": "Must support single sign-on",
        "category": "Authentication",
        "status": REQUIREMENT_STATUS_DRAFT,
    })

    requirement = _first(Requirement)
    result["audit_tasks"] = requirement is not None and _seed(AuditTask, {
        "requirement_id": requirement.id,
        "text": "Check login audit",
        "notes": "Review all login-related requirements",
    })

    task = _first(AuditTask)
    result["issues"] = task is not None and _seed(Issue, {
        "audit_task_id": task.id,
        "title": "Login fails on Safari",
        "description": "Users report that the SSO redirect loops on Safari 17.",
    })

    return result
