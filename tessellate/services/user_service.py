"""
User service: user CRUD and password login.

Emails are validated with ``email_validator`` and stored lower-cased, so
login lookups are case-insensitive. A password is optional on create; a
user without one can exist (and be assigned to projects) but cannot log in.
"""

import logging

from email_validator import EmailNotValidError, validate_email

from tessellate.core.exceptions import AuthError, ValidationError
from tessellate.models.auth import User
from tessellate.services import entity_store, lifecycle
from tessellate.services.query_service import USER_DETAIL_LOAD, USER_LIST_LOAD
from tessellate.services.relationship_service import require_optional_client
from tessellate.utils.crypto import hash_password, verify_password

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "mock-token-"


def normalize_email(email: str) -> str:
    """Validate syntax only (no DNS) and return the lower-cased address."""
    try:
        valid = validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Invalid request", f"Invalid email: {e}", details={"email": str(e)})
    return valid.normalized.lower()


def _prepare(values: dict) -> dict:
    """Shared create/update handling for email, role, client and password."""
    values = dict(values)
    if values.get("email") is not None:
        values["email"] = normalize_email(values["email"])
    lifecycle.validate_vocabulary(User, values)
    require_optional_client(values.get("client_id"))
    password = values.pop("password", None)
    if password:
        values["password_hash"] = hash_password(password)
    return values


# ═══════════════════════════════════════════════════════════════
# User CRUD
# ═══════════════════════════════════════════════════════════════
def create_user(values: dict) -> User:
    """Create a user. ``role`` must be ADMIN, CONSULTANT or CLIENT."""
    return entity_store.create(User, _prepare(values))


def get_user(user_id: int) -> User:
    return entity_store.get_by_id(User, user_id, load=USER_DETAIL_LOAD)


def list_users(filters: dict | None = None) -> list[User]:
    return entity_store.list_entities(User, filters, load=USER_LIST_LOAD)


def update_user(user_id: int, patch: dict) -> User:
    user = entity_store.get_by_id(User, user_id)
    return entity_store.apply_patch(user, _prepare(patch))


def delete_user(user_id: int) -> None:
    entity_store.delete(User, user_id)


# ═══════════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════════
def get_user_by_email(email: str) -> User | None:
    return User.query_active().filter(User.email == email.lower()).order_by(User.id).first()


def authenticate(email: str, password: str) -> User:
    """Return the user for valid credentials.

    Unknown email, missing password hash and wrong password all raise the
    same ``AuthError`` so callers cannot tell them apart.
    """
    user = get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed for email=%s", email)
        raise AuthError()
    logger.info("Login succeeded for user=%s", user.id)
    return user


def issue_token(user: User) -> str:
    """Opaque session token. Not signed and not verified on later requests."""
    return f"{TOKEN_PREFIX}{user.id}"
