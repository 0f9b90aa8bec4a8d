"""
Blueprint helpers shared by the API blueprints.

Request bodies use camelCase keys; services take snake_case model
attributes. Each blueprint declares the keys it accepts as
``{camelKey: (attribute, type)}`` and runs the body through
``parse_body``. Unknown keys are ignored, ``null`` counts as absent.
"""

from flask import jsonify, request

from tessellate.core.exceptions import ValidationError
from tessellate.utils.helpers import parse_id


def read_json() -> dict:
    """Return the JSON object body, or raise ValidationError."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Invalid request", "Request body must be a JSON object")
    return data


def _check_type(key, value, expected):
    if expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ValidationError(
            "Invalid request",
            f"{key} must be a {'number' if expected is int else 'string'}",
            details={key: "wrong type"},
        )


def parse_body(fields: dict, required=()) -> dict:
    """Map the JSON body onto model attribute names.

    Args:
        fields: ``{camelKey: (attribute, type)}`` accepted by the endpoint.
        required: camelKeys that must be present; string values must be
            non-blank.

    Returns:
        ``{attribute: value}`` for every accepted key present and non-null.
    """
    data = read_json()
    values = {}
    for key, (attr, expected) in fields.items():
        value = data.get(key)
        if value is None:
            continue
        _check_type(key, value, expected)
        values[attr] = value

    for key in required:
        attr = fields[key][0]
        value = values.get(attr)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Invalid request", f"{key} is required", details={key: "required"})
    return values


def id_arg(name: str, label: str):
    """Optional integer filter from the query string (``?projectId=3``)."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    return parse_id(raw, label)


def message(text: str, status: int = 200):
    return jsonify({"message": text}), status
