"""
Audit Blueprint — audit tasks and the issues they raise.

Hierarchy:
    Requirement → AuditTask → Issue

Endpoints:
  GET    /api/v1/audit-tasks                     ?requirementId=
  GET    /api/v1/audit-tasks/<id>
  PUT    /api/v1/audit-tasks/<id>
  DELETE /api/v1/audit-tasks/<id>
  GET    /api/v1/requirements/<id>/audit-tasks
  POST   /api/v1/requirements/<id>/audit-tasks

  GET    /api/v1/issues                          ?auditTaskId=
  GET    /api/v1/issues/<id>
  PUT    /api/v1/issues/<id>
  DELETE /api/v1/issues/<id>
  GET    /api/v1/audit-tasks/<id>/issues
  POST   /api/v1/audit-tasks/<id>/issues
"""

from flask import Blueprint, jsonify

from tessellate.blueprints import id_arg, message, parse_body
from tessellate.services import audit_service
from tessellate.services.query_service import AUDIT_TASK_LOAD, ISSUE_LOAD, project, project_all
from tessellate.utils.helpers import parse_id

audit_bp = Blueprint("audit_bp", __name__, url_prefix="/api/v1")

AUDIT_TASK_FIELDS = {
    "text": ("text", str),
    "status": ("status", str),
    "notes": ("notes", str),
}

ISSUE_FIELDS = {
    "title": ("title", str),
    "description": ("description", str),
    "priority": ("priority", str),
    "phase": ("phase", str),
    "estimateHrs": ("estimate_hrs", int),
    "status": ("status", str),
    "type": ("type", str),
}


# ═════════════════════════════════════════════════════════════════════════
# AUDIT TASKS
# ═════════════════════════════════════════════════════════════════════════

@audit_bp.route("/audit-tasks", methods=["GET"])
def list_audit_tasks():
    tasks = audit_service.list_audit_tasks({"requirement_id": id_arg("requirementId", "requirement")})
    return jsonify(project_all(tasks, AUDIT_TASK_LOAD)), 200


@audit_bp.route("/audit-tasks/<task_id>", methods=["GET"])
def get_audit_task(task_id):
    entity = audit_service.get_audit_task(parse_id(task_id, "audit task"))
    return jsonify(project(entity, AUDIT_TASK_LOAD)), 200


@audit_bp.route("/audit-tasks/<task_id>", methods=["PUT"])
def update_audit_task(task_id):
    tid = parse_id(task_id, "audit task")
    entity = audit_service.update_audit_task(tid, parse_body(AUDIT_TASK_FIELDS))
    return jsonify(project(entity)), 200


@audit_bp.route("/audit-tasks/<task_id>", methods=["DELETE"])
def delete_audit_task(task_id):
    audit_service.delete_audit_task(parse_id(task_id, "audit task"))
    return message("Audit task deleted successfully")


@audit_bp.route("/requirements/<requirement_id>/audit-tasks", methods=["GET"])
def list_requirement_audit_tasks(requirement_id):
    tasks = audit_service.list_requirement_audit_tasks(parse_id(requirement_id, "requirement"))
    return jsonify(project_all(tasks, AUDIT_TASK_LOAD)), 200


@audit_bp.route("/requirements/<requirement_id>/audit-tasks", methods=["POST"])
def create_audit_task(requirement_id):
    rid = parse_id(requirement_id, "requirement")
    values = parse_body(AUDIT_TASK_FIELDS, required=("text",))
    return jsonify(project(audit_service.create_audit_task(rid, values))), 201


# ═════════════════════════════════════════════════════════════════════════
# ISSUES
# ═════════════════════════════════════════════════════════════════════════

@audit_bp.route("/issues", methods=["GET"])
def list_issues():
    issues = audit_service.list_issues({"audit_task_id": id_arg("auditTaskId", "audit task")})
    return jsonify(project_all(issues, ISSUE_LOAD)), 200


@audit_bp.route("/issues/<issue_id>", methods=["GET"])
def get_issue(issue_id):
    entity = audit_service.get_issue(parse_id(issue_id, "issue"))
    return jsonify(project(entity, ISSUE_LOAD)), 200


@audit_bp.route("/issues/<issue_id>", methods=["PUT"])
def update_issue(issue_id):
    iid = parse_id(issue_id, "issue")
    entity = audit_service.update_issue(iid, parse_body(ISSUE_FIELDS))
    return jsonify(project(entity)), 200


@audit_bp.route("/issues/<issue_id>", methods=["DELETE"])
def delete_issue(issue_id):
    audit_service.delete_issue(parse_id(issue_id, "issue"))
    return message("Issue deleted successfully")


@audit_bp.route("/audit-tasks/<task_id>/issues", methods=["GET"])
def list_task_issues(task_id):
    issues = audit_service.list_task_issues(parse_id(task_id, "audit task"))
    return jsonify(project_all(issues, ISSUE_LOAD)), 200


@audit_bp.route("/audit-tasks/<task_id>/issues", methods=["POST"])
def create_issue(task_id):
    tid = parse_id(task_id, "audit task")
    values = parse_body(ISSUE_FIELDS, required=("title",))
    return jsonify(project(audit_service.create_issue(tid, values))), 201
