"""
Audit service: AuditTasks under Requirements and Issues under AuditTasks.

AuditTask status defaults to PENDING; Issue status and type default to
OPEN and DEFECT. All three are open strings.
"""

from tessellate.models.audit import AuditTask, Issue
from tessellate.models.requirement import Requirement
from tessellate.services import entity_store, lifecycle, relationship_service
from tessellate.services.query_service import AUDIT_TASK_LOAD, ISSUE_LOAD


# ═══════════════════════════════════════════════════════════════
# Audit tasks
# ═══════════════════════════════════════════════════════════════
def create_audit_task(requirement_id: int, values: dict) -> AuditTask:
    values = lifecycle.apply_create_defaults(AuditTask, values)
    return relationship_service.create_child(
        AuditTask, Requirement, "requirement_id", requirement_id, values,
    )


def get_audit_task(task_id: int) -> AuditTask:
    return entity_store.get_by_id(AuditTask, task_id, load=AUDIT_TASK_LOAD)


def list_audit_tasks(filters: dict | None = None) -> list[AuditTask]:
    return entity_store.list_entities(AuditTask, filters, load=AUDIT_TASK_LOAD)


def list_requirement_audit_tasks(requirement_id: int) -> list[AuditTask]:
    relationship_service.require_parent(Requirement, requirement_id)
    return list_audit_tasks({"requirement_id": requirement_id})


def update_audit_task(task_id: int, patch: dict) -> AuditTask:
    return entity_store.update(AuditTask, task_id, patch)


def delete_audit_task(task_id: int) -> None:
    entity_store.delete(AuditTask, task_id)


# ═══════════════════════════════════════════════════════════════
# Issues
# ═══════════════════════════════════════════════════════════════
def create_issue(task_id: int, values: dict) -> Issue:
    values = lifecycle.apply_create_defaults(Issue, values)
    return relationship_service.create_child(Issue, AuditTask, "audit_task_id", task_id, values)


def get_issue(issue_id: int) -> Issue:
    return entity_store.get_by_id(Issue, issue_id, load=ISSUE_LOAD)


def list_issues(filters: dict | None = None) -> list[Issue]:
    return entity_store.list_entities(Issue, filters, load=ISSUE_LOAD)


def list_task_issues(task_id: int) -> list[Issue]:
    relationship_service.require_parent(AuditTask, task_id)
    return list_issues({"audit_task_id": task_id})


def update_issue(issue_id: int, patch: dict) -> Issue:
    return entity_store.update(Issue, issue_id, patch)


def delete_issue(issue_id: int) -> None:
    entity_store.delete(Issue, issue_id)
