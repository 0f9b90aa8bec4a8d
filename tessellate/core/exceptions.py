"""
Application-wide exception hierarchy.

Services raise these; the app factory registers one handler per type and
renders the standard ``{error, message?, code}`` body, so blueprints never
build error responses by hand.

    ValidationError -> 400
    AuthError       -> 401
    NotFoundError   -> 404
    StoreError      -> 500

Usage:
    from tessellate.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Project", resource_id=42)
    raise ValidationError("Invalid request", "name is required")
"""


class NotFoundError(Exception):
    """Raised when a requested entity (or a required parent) does not exist.

    Args:
        resource: Human-readable entity label (e.g. "Project", "Audit task").
        resource_id: The PK that was looked up. Logged, not returned to callers.
    """

    status_code = 404

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        self.error = f"{resource} not found"
        self.message = None
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when input is malformed or violates a vocabulary rule.

    Args:
        error: Short error label returned as ``error`` (e.g. "Invalid project ID").
        message: Optional detail returned as ``message``.
        details: Optional field-level breakdown. Keys are field names.
    """

    status_code = 400

    def __init__(self, error: str, message: str | None = None, details: dict | None = None) -> None:
        self.error = error
        self.message = message
        self.details = details or {}
        super().__init__(message or error)


class AuthError(Exception):
    """Raised on failed login. Carries no hint about which credential was wrong."""

    status_code = 401

    def __init__(self, error: str = "Invalid credentials") -> None:
        self.error = error
        self.message = None
        super().__init__(error)


class StoreError(Exception):
    """Raised when a write against the database fails.

    The session has already been rolled back when this is raised. ``error``
    is a generic, caller-safe message; the driver error is only logged.
    """

    status_code = 500

    def __init__(self, error: str) -> None:
        self.error = error
        self.message = None
        super().__init__(error)
