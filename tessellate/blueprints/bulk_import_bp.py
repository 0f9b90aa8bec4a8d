"""
Bulk Import Blueprint — CSV upload of requirements.

Endpoints:
  POST /api/v1/uploads/requirements-csv/<project_id>   multipart, field "file"

CSV layout: one requirement per line, ``text[,category]``, no header row.
"""

import logging

from flask import Blueprint, jsonify, request

from tessellate.services.bulk_import_service import import_requirements_csv
from tessellate.utils.helpers import parse_id

logger = logging.getLogger(__name__)

bulk_import_bp = Blueprint("bulk_import_bp", __name__, url_prefix="/api/v1/uploads")


@bulk_import_bp.route("/requirements-csv/<project_id>", methods=["POST"])
def upload_requirements_csv(project_id):
    """Import requirements from an uploaded CSV file into a project."""
    pid = parse_id(project_id, "project")

    uploaded = request.files.get("file")
    content = None
    if uploaded is not None:
        logger.info("CSV upload for project=%s: %s", pid, uploaded.filename or "<unnamed>")
        content = uploaded.read()
    return jsonify(import_requirements_csv(pid, content)), 201
