"""
Tessellate Projects
Requirement domain model.

Chain:  Project → Requirement → AuditTask → Issue

A requirement is one line of the audit scope ("Must encrypt data at rest"),
optionally categorised, and marked MET / NOT_MET as audit tasks conclude.
"""

from tessellate.models import db
from tessellate.models.base import EntityModel, put_optional


# ── Constants ────────────────────────────────────────────────────────────────

REQUIREMENT_STATUS_DRAFT = "DRAFT"
REQUIREMENT_STATUS_NOT_MET = "NOT_MET"
REQUIREMENT_STATUS_MET = "MET"

REQUIREMENT_STATUSES = (
    REQUIREMENT_STATUS_DRAFT,
    REQUIREMENT_STATUS_NOT_MET,
    REQUIREMENT_STATUS_MET,
)


class Requirement(EntityModel):
    """
    Auditable requirement belonging to exactly one Project.

    Created one at a time through the API or in bulk from a CSV upload;
    in both cases the status defaults to NOT_MET.
    """

    __tablename__ = "requirements"
    __label__ = "Requirement"

    project_id = db.Column(
        db.Integer,
        db.ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=True)
    status = db.Column(
        db.String(20), nullable=False, default=REQUIREMENT_STATUS_NOT_MET, index=True,
        comment="DRAFT | NOT_MET | MET",
    )

    # ── Relationships
    project = db.relationship("Project", back_populates="requirements")
    audit_tasks = db.relationship(
        "AuditTask", back_populates="requirement",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="AuditTask.id",
    )

    def to_dict(self, include=()):
        result = {
            "id": self.id,
            "projectId": self.project_id,
            "text": self.text,
            "status": self.status,
        }
        put_optional(result, "category", self.category)
        if "audit_tasks" in include and self.audit_tasks:
            result["auditTasks"] = [t.to_dict() for t in self.audit_tasks]
        return self._timestamps(result)

    def __repr__(self):
        return f"<Requirement {self.id}: {self.text[:30]}>"
