"""
User Blueprint.

Endpoints:
  GET    /api/v1/users                 ?clientId=
  POST   /api/v1/users
  GET    /api/v1/users/<id>
  PUT    /api/v1/users/<id>
  DELETE /api/v1/users/<id>
  GET    /api/v1/users/<id>/projects

``password`` is accepted on create and update; the hash never leaves the
server.
"""

from flask import Blueprint, jsonify

from tessellate.blueprints import id_arg, message, parse_body
from tessellate.services import relationship_service, user_service
from tessellate.services.query_service import USER_DETAIL_LOAD, USER_LIST_LOAD, project, project_all
from tessellate.utils.helpers import parse_id

user_bp = Blueprint("user_bp", __name__, url_prefix="/api/v1/users")

USER_FIELDS = {
    "name": ("name", str),
    "email": ("email", str),
    "role": ("role", str),
    "password": ("password", str),
    "clientId": ("client_id", int),
}


@user_bp.route("", methods=["GET"])
def list_users():
    users = user_service.list_users({"client_id": id_arg("clientId", "client")})
    return jsonify(project_all(users, USER_LIST_LOAD)), 200


@user_bp.route("", methods=["POST"])
def create_user():
    values = parse_body(USER_FIELDS, required=("name", "email", "role"))
    return jsonify(project(user_service.create_user(values))), 201


@user_bp.route("/<user_id>", methods=["GET"])
def get_user(user_id):
    entity = user_service.get_user(parse_id(user_id, "user"))
    return jsonify(project(entity, USER_DETAIL_LOAD)), 200


@user_bp.route("/<user_id>", methods=["PUT"])
def update_user(user_id):
    uid = parse_id(user_id, "user")
    entity = user_service.update_user(uid, parse_body(USER_FIELDS))
    return jsonify(project(entity)), 200


@user_bp.route("/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    user_service.delete_user(parse_id(user_id, "user"))
    return message("User deleted successfully")


@user_bp.route("/<user_id>/projects", methods=["GET"])
def list_user_projects(user_id):
    projects = relationship_service.list_user_projects(parse_id(user_id, "user"))
    return jsonify(project_all(projects)), 200
