"""
Auth Blueprint.

Endpoints:
  POST /api/v1/auth/login   {email, password} → {token, user}

The token is an opaque ``mock-token-<userId>`` string; no route verifies it.
"""

from flask import Blueprint, jsonify

from tessellate.blueprints import parse_body
from tessellate.services import user_service
from tessellate.services.query_service import project

auth_bp = Blueprint("auth_bp", __name__, url_prefix="/api/v1/auth")

LOGIN_FIELDS = {
    "email": ("email", str),
    "password": ("password", str),
}


@auth_bp.route("/login", methods=["POST"])
def login():
    """Email + password login. Every credential failure is the same 401."""
    values = parse_body(LOGIN_FIELDS, required=("email", "password"))
    email = user_service.normalize_email(values["email"])
    user = user_service.authenticate(email, values["password"])
    return jsonify({"token": user_service.issue_token(user), "user": project(user)}), 200
