"""
Soft Delete Mixin

Adds a `deleted_at` timestamp column and the query helpers every read path
goes through. Rows carrying a marker are invisible to the API; the delete
endpoints themselves remove rows outright.

Usage:
    class MyModel(SoftDeleteMixin, db.Model):
        ...

    # Query only live records
    MyModel.query_active().all()

    # Flag a row (maintenance scripts, data fixes)
    obj.soft_delete()
    db.session.commit()
"""

from datetime import datetime, timezone

from tessellate.models import db


class SoftDeleteMixin:
    """Mixin that adds a soft-delete marker to any SQLAlchemy model."""

    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, default=None, index=True)

    def soft_delete(self):
        """Mark this record as deleted."""
        self.deleted_at = datetime.now(timezone.utc)

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @classmethod
    def query_active(cls):
        """Return a query that excludes soft-deleted records."""
        return cls.query.filter(cls.deleted_at.is_(None))
