"""
Client Blueprint.

Endpoints:
  GET    /api/v1/clients
  POST   /api/v1/clients
  GET    /api/v1/clients/<id>
  PUT    /api/v1/clients/<id>
  DELETE /api/v1/clients/<id>
  GET    /api/v1/clients/<id>/users
  GET    /api/v1/clients/<id>/projects
"""

from flask import Blueprint, jsonify

from tessellate.blueprints import message, parse_body
from tessellate.services import client_service, relationship_service
from tessellate.services.query_service import CLIENT_LOAD, project, project_all
from tessellate.utils.helpers import parse_id

client_bp = Blueprint("client_bp", __name__, url_prefix="/api/v1/clients")

CLIENT_FIELDS = {
    "name": ("name", str),
    "industry": ("industry", str),
    "contactName": ("contact_name", str),
    "contactEmail": ("contact_email", str),
}


@client_bp.route("", methods=["GET"])
def list_clients():
    return jsonify(project_all(client_service.list_clients(), CLIENT_LOAD)), 200


@client_bp.route("", methods=["POST"])
def create_client():
    values = parse_body(CLIENT_FIELDS, required=("name",))
    return jsonify(project(client_service.create_client(values))), 201


@client_bp.route("/<client_id>", methods=["GET"])
def get_client(client_id):
    entity = client_service.get_client(parse_id(client_id, "client"))
    return jsonify(project(entity, CLIENT_LOAD)), 200


@client_bp.route("/<client_id>", methods=["PUT"])
def update_client(client_id):
    cid = parse_id(client_id, "client")
    entity = client_service.update_client(cid, parse_body(CLIENT_FIELDS))
    return jsonify(project(entity)), 200


@client_bp.route("/<client_id>", methods=["DELETE"])
def delete_client(client_id):
    client_service.delete_client(parse_id(client_id, "client"))
    return message("Client deleted successfully")


@client_bp.route("/<client_id>/users", methods=["GET"])
def list_client_users(client_id):
    users = relationship_service.list_client_users(parse_id(client_id, "client"))
    return jsonify(project_all(users)), 200


@client_bp.route("/<client_id>/projects", methods=["GET"])
def list_client_projects(client_id):
    projects = relationship_service.list_client_projects(parse_id(client_id, "client"))
    return jsonify(project_all(projects)), 200
