"""
EntityModel: abstract base for every tracked entity.

Adds to each table:
  - surrogate integer primary key
  - created_at / updated_at timestamps
  - deleted_at soft-delete marker (SoftDeleteMixin)

and the projection helpers shared by the ``to_dict`` implementations.
Projections use camelCase keys and omit optional values that are ``None``.
"""

from datetime import datetime, timezone

from tessellate.models import db
from tessellate.models.soft_delete import SoftDeleteMixin


def _utcnow():
    return datetime.now(timezone.utc)


def iso(value):
    return value.isoformat() if value else None


def put_optional(data: dict, key: str, value) -> None:
    """Set ``data[key]`` only when ``value`` is not None."""
    if value is not None:
        data[key] = value


class EntityModel(SoftDeleteMixin, db.Model):
    """Abstract base for the Client/User/Project/Requirement/AuditTask/Issue tables."""
    __abstract__ = True

    # Label used in "<label> not found" and store error messages
    __label__ = "Entity"

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def _timestamps(self, data: dict) -> dict:
        data["createdAt"] = iso(self.created_at)
        data["updatedAt"] = iso(self.updated_at)
        return data

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"
