"""
Requirement Blueprint.

Hierarchy:
    Project → Requirement   (created under a project, status NOT_MET by default)

Endpoints:
  GET    /api/v1/requirements                    ?projectId=&status=
  GET    /api/v1/requirements/<id>
  PUT    /api/v1/requirements/<id>
  DELETE /api/v1/requirements/<id>
  GET    /api/v1/projects/<id>/requirements
  POST   /api/v1/projects/<id>/requirements
"""

from flask import Blueprint, jsonify, request

from tessellate.blueprints import id_arg, message, parse_body
from tessellate.services import requirement_service
from tessellate.services.query_service import REQUIREMENT_LOAD, project, project_all
from tessellate.utils.helpers import parse_id

requirement_bp = Blueprint("requirement_bp", __name__, url_prefix="/api/v1")

REQUIREMENT_FIELDS = {
    "text": ("text", str),
    "category": ("category", str),
    "status": ("status", str),
}


# ═════════════════════════════════════════════════════════════════════════
# REQUIREMENTS
# ═════════════════════════════════════════════════════════════════════════

@requirement_bp.route("/requirements", methods=["GET"])
def list_requirements():
    filters = {
        "project_id": id_arg("projectId", "project"),
        "status": request.args.get("status") or None,
    }
    requirements = requirement_service.list_requirements(filters)
    return jsonify(project_all(requirements, REQUIREMENT_LOAD)), 200


@requirement_bp.route("/requirements/<requirement_id>", methods=["GET"])
def get_requirement(requirement_id):
    entity = requirement_service.get_requirement(parse_id(requirement_id, "requirement"))
    return jsonify(project(entity, REQUIREMENT_LOAD)), 200


@requirement_bp.route("/requirements/<requirement_id>", methods=["PUT"])
def update_requirement(requirement_id):
    rid = parse_id(requirement_id, "requirement")
    entity = requirement_service.update_requirement(rid, parse_body(REQUIREMENT_FIELDS))
    return jsonify(project(entity)), 200


@requirement_bp.route("/requirements/<requirement_id>", methods=["DELETE"])
def delete_requirement(requirement_id):
    requirement_service.delete_requirement(parse_id(requirement_id, "requirement"))
    return message("Requirement deleted successfully")


# ── Nested under a project ───────────────────────────────────────────────

@requirement_bp.route("/projects/<project_id>/requirements", methods=["GET"])
def list_project_requirements(project_id):
    requirements = requirement_service.list_project_requirements(parse_id(project_id, "project"))
    return jsonify(project_all(requirements, REQUIREMENT_LOAD)), 200


@requirement_bp.route("/projects/<project_id>/requirements", methods=["POST"])
def create_requirement(project_id):
    """Create a requirement under a project."""
    pid = parse_id(project_id, "project")
    values = parse_body(REQUIREMENT_FIELDS, required=("text",))
    return jsonify(project(requirement_service.create_requirement(pid, values))), 201
