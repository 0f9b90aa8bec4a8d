"""
Status / lifecycle rules.

Creation defaults (applied only when the caller omitted the field):

    Project.status      NEW
    Requirement.status  NOT_MET
    AuditTask.status    PENDING
    Issue.status        OPEN
    Issue.type          DEFECT

Closed vocabularies (rejected with ValidationError otherwise):

    User.role           ADMIN | CONSULTANT | CLIENT
    Requirement.status  DRAFT | NOT_MET | MET

Project, AuditTask and Issue statuses and Issue.type accept any string.

Archive is a dedicated one-way transition: the project ends up ARCHIVED
whatever its current status, and archiving again changes nothing.
"""

import logging

from tessellate.core.exceptions import ValidationError
from tessellate.models.audit import (
    AUDIT_TASK_STATUS_PENDING,
    ISSUE_STATUS_OPEN,
    ISSUE_TYPE_DEFECT,
    AuditTask,
    Issue,
)
from tessellate.models.auth import USER_ROLES, User
from tessellate.models.project import PROJECT_STATUS_ARCHIVED, PROJECT_STATUS_NEW, Project
from tessellate.models.requirement import REQUIREMENT_STATUS_NOT_MET, REQUIREMENT_STATUSES, Requirement
from tessellate.services import entity_store

logger = logging.getLogger(__name__)

CREATE_DEFAULTS = {
    Project: {"status": PROJECT_STATUS_NEW},
    Requirement: {"status": REQUIREMENT_STATUS_NOT_MET},
    AuditTask: {"status": AUDIT_TASK_STATUS_PENDING},
    Issue: {"status": ISSUE_STATUS_OPEN, "type": ISSUE_TYPE_DEFECT},
}

CLOSED_VOCABULARIES = {
    User: {"role": USER_ROLES},
    Requirement: {"status": REQUIREMENT_STATUSES},
}


def apply_create_defaults(model, values: dict) -> dict:
    """Return ``values`` with the model's defaults filled into absent keys."""
    result = dict(values)
    for field, default in CREATE_DEFAULTS.get(model, {}).items():
        if result.get(field) is None:
            result[field] = default
    return result


def validate_vocabulary(model, values: dict) -> None:
    """Reject values outside a closed vocabulary. ``None`` means "not supplied"."""
    for field, allowed in CLOSED_VOCABULARIES.get(model, {}).items():
        value = values.get(field)
        if value is not None and value not in allowed:
            raise ValidationError(
                "Invalid request",
                f"{field} must be one of: {', '.join(allowed)}",
                details={field: f"got {value!r}"},
            )


def archive_project(project_id: int) -> Project:
    """Move a project to ARCHIVED unconditionally."""
    project = entity_store.get_by_id(Project, project_id)
    previous = project.status
    project = entity_store.apply_patch(project, {"status": PROJECT_STATUS_ARCHIVED})
    logger.info("Archived project=%s (was %s)", project_id, previous)
    return project
