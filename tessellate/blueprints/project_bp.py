"""
Project Blueprint — CRUD, archive, membership and nested listings.

Endpoints:
  GET    /api/v1/projects                        ?status=&clientId=
  POST   /api/v1/projects
  GET    /api/v1/projects/<id>
  PUT    /api/v1/projects/<id>
  DELETE /api/v1/projects/<id>
  POST   /api/v1/projects/<id>/archive
  GET    /api/v1/projects/<id>/users
  POST   /api/v1/projects/<id>/users/<user_id>
  DELETE /api/v1/projects/<id>/users/<user_id>
  GET    /api/v1/projects/<id>/issues
"""

from flask import Blueprint, jsonify, request

from tessellate.blueprints import id_arg, message, parse_body
from tessellate.services import project_service
from tessellate.services.query_service import (
    PROJECT_DETAIL_LOAD,
    PROJECT_LIST_LOAD,
    USER_LIST_LOAD,
    project,
    project_all,
)
from tessellate.utils.helpers import parse_id

project_bp = Blueprint("project_bp", __name__, url_prefix="/api/v1/projects")

PROJECT_FIELDS = {
    "name": ("name", str),
    "clientName": ("client_name", str),
    "status": ("status", str),
    "clientId": ("client_id", int),
}


@project_bp.route("", methods=["GET"])
def list_projects():
    filters = {
        "status": request.args.get("status") or None,
        "client_id": id_arg("clientId", "client"),
    }
    projects = project_service.list_projects(filters)
    return jsonify(project_all(projects, PROJECT_LIST_LOAD)), 200


@project_bp.route("", methods=["POST"])
def create_project():
    values = parse_body(PROJECT_FIELDS, required=("name",))
    return jsonify(project(project_service.create_project(values))), 201


@project_bp.route("/<project_id>", methods=["GET"])
def get_project(project_id):
    entity = project_service.get_project(parse_id(project_id, "project"))
    return jsonify(project(entity, PROJECT_DETAIL_LOAD)), 200


@project_bp.route("/<project_id>", methods=["PUT"])
def update_project(project_id):
    pid = parse_id(project_id, "project")
    entity = project_service.update_project(pid, parse_body(PROJECT_FIELDS))
    return jsonify(project(entity)), 200


@project_bp.route("/<project_id>", methods=["DELETE"])
def delete_project(project_id):
    project_service.delete_project(parse_id(project_id, "project"))
    return message("Project deleted successfully")


@project_bp.route("/<project_id>/archive", methods=["POST"])
def archive_project(project_id):
    entity = project_service.archive_project(parse_id(project_id, "project"))
    return jsonify(project(entity)), 200


# ── Membership ───────────────────────────────────────────────────────────

@project_bp.route("/<project_id>/users", methods=["GET"])
def list_project_users(project_id):
    users = project_service.list_project_users(parse_id(project_id, "project"))
    return jsonify(project_all(users, USER_LIST_LOAD)), 200


@project_bp.route("/<project_id>/users/<user_id>", methods=["POST"])
def assign_user(project_id, user_id):
    project_service.assign_user(parse_id(project_id, "project"), parse_id(user_id, "user"))
    return message("User assigned to project successfully")


@project_bp.route("/<project_id>/users/<user_id>", methods=["DELETE"])
def remove_user(project_id, user_id):
    project_service.remove_user(parse_id(project_id, "project"), parse_id(user_id, "user"))
    return message("User removed from project successfully")


@project_bp.route("/<project_id>/issues", methods=["GET"])
def list_project_issues(project_id):
    issues = project_service.list_project_issues(parse_id(project_id, "project"))
    return jsonify(project_all(issues)), 200
