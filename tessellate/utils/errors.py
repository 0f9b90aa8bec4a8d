"""Standardised API error responses.

Usage
-----
    from tessellate.utils.errors import api_error

    return api_error(404, "Project not found")
    return api_error(400, "Invalid request", message="name is required")

Every error body has the same shape::

    {"error": "...", "message": "...", "code": 404}

``message`` is omitted when empty and ``code`` always mirrors the HTTP status.
"""

from __future__ import annotations

from flask import jsonify


def api_error(
    status: int,
    error: str,
    *,
    message: str | None = None,
    details: dict | None = None,
):
    """Return a standard JSON error response.

    Parameters
    ----------
    status : int
        HTTP status; echoed in the body as ``code``.
    error : str
        Short human-readable label.
    message : str, optional
        Longer explanation (validation failure, CSV parse error, ...).
    details : dict, optional
        Field-level breakdown for validation failures.

    Returns
    -------
    tuple[Response, int]
        ``(jsonify(body), status)`` – drop-in for Flask views and handlers.
    """
    body: dict = {"error": error}
    if message:
        body["message"] = message
    if details:
        body["details"] = details
    body["code"] = status
    return jsonify(body), status


def exception_response(exc):
    """Render one of the ``tessellate.core.exceptions`` types."""
    return api_error(
        exc.status_code,
        exc.error,
        message=getattr(exc, "message", None),
        details=getattr(exc, "details", None),
    )
