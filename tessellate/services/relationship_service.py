"""
Relationship manager.

Two shapes of relationship are maintained here:

One-to-many ownership (Client→Project, Client→User, Project→Requirement,
Requirement→AuditTask, AuditTask→Issue):
    ``require_parent`` looks the parent up before a child is inserted and
    raises NotFoundError if it is missing, so the child is never created.
    The check and the insert are separate statements; SQLite FK
    enforcement (enabled per connection in the app factory) makes an insert
    against a concurrently deleted parent fail instead of orphaning.

Many-to-many Project↔User (``project_users``):
    ``assign_user`` adds the link if absent (idempotent).
    ``unassign_user`` drops the link if present; a missing link is a no-op.
"""

import logging

from tessellate.models import db
from tessellate.models.audit import AuditTask, Issue
from tessellate.models.auth import User, project_users
from tessellate.models.client import Client
from tessellate.models.project import Project
from tessellate.models.requirement import Requirement
from tessellate.services import entity_store
from tessellate.services.query_service import NO_RELATIONS, load_options
from tessellate.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)


def require_parent(model, pk: int):
    """Return the parent row or raise NotFoundError."""
    return entity_store.get_by_id(model, pk)


def require_optional_client(client_id):
    """Validate an optional client reference on a User or Project."""
    if client_id is not None:
        require_parent(Client, client_id)


def create_child(model, parent_model, parent_field: str, parent_id: int, values: dict):
    """Create ``model`` under an existing ``parent_model`` row."""
    require_parent(parent_model, parent_id)
    return entity_store.create(model, {**values, parent_field: parent_id})


# ── Project ↔ User ───────────────────────────────────────────────────────────


def assign_user(project_id: int, user_id: int) -> bool:
    """Link a user to a project.

    Returns True when a new association row was written, False when the
    pair was already linked.
    """
    project = require_parent(Project, project_id)
    user = require_parent(User, user_id)
    if user in project.users:
        return False
    project.users.append(user)
    commit_or_raise("Failed to assign user to project")
    logger.info("Assigned user=%s to project=%s", user_id, project_id)
    return True


def unassign_user(project_id: int, user_id: int) -> bool:
    """Unlink a user from a project.

    Returns True when an association row was removed, False when there was
    nothing to remove.
    """
    project = require_parent(Project, project_id)
    user = require_parent(User, user_id)
    if user not in project.users:
        return False
    project.users.remove(user)
    commit_or_raise("Failed to remove user from project")
    logger.info("Removed user=%s from project=%s", user_id, project_id)
    return True


# ── Relationship listings ────────────────────────────────────────────────────


def list_project_users(project_id: int, load=("client",)) -> list[User]:
    """Users assigned to a project. Raises NotFoundError for a missing project."""
    require_parent(Project, project_id)
    return (
        User.query_active()
        .join(User.projects)
        .filter(Project.id == project_id)
        .options(*load_options(User, load))
        .order_by(User.id)
        .all()
    )


def list_user_projects(user_id: int, load=NO_RELATIONS) -> list[Project]:
    """Projects a user is assigned to. Raises NotFoundError for a missing user."""
    require_parent(User, user_id)
    return (
        Project.query_active()
        .join(Project.users)
        .filter(User.id == user_id)
        .options(*load_options(Project, load))
        .order_by(Project.id)
        .all()
    )


def list_client_users(client_id: int) -> list[User]:
    require_parent(Client, client_id)
    return entity_store.list_entities(User, {"client_id": client_id})


def list_client_projects(client_id: int) -> list[Project]:
    require_parent(Client, client_id)
    return entity_store.list_entities(Project, {"client_id": client_id})


def list_project_issues(project_id: int) -> list[Issue]:
    """Issues raised anywhere under a project (via its audit tasks)."""
    require_parent(Project, project_id)
    return (
        Issue.query_active()
        .join(AuditTask, Issue.audit_task_id == AuditTask.id)
        .join(Requirement, AuditTask.requirement_id == Requirement.id)
        .filter(
            Requirement.project_id == project_id,
            AuditTask.deleted_at.is_(None),
            Requirement.deleted_at.is_(None),
        )
        .order_by(Issue.id)
        .all()
    )


def count_links(project_id: int, user_id: int) -> int:
    """Number of association rows for a pair (0 or 1)."""
    return db.session.query(project_users).filter(
        project_users.c.project_id == project_id,
        project_users.c.user_id == user_id,
    ).count()
