"""
Audit work models: AuditTask and Issue.

An AuditTask checks one Requirement; a finding raised by the task is
recorded as an Issue. Status and type are open strings: the constants below
are the defaults applied at creation, not an exhaustive list.
"""

from tessellate.models import db
from tessellate.models.base import EntityModel, put_optional


AUDIT_TASK_STATUS_PENDING = "PENDING"

ISSUE_STATUS_OPEN = "OPEN"
ISSUE_TYPE_DEFECT = "DEFECT"


class AuditTask(EntityModel):
    __tablename__ = "audit_tasks"
    __label__ = "Audit task"

    requirement_id = db.Column(
        db.Integer,
        db.ForeignKey("requirements.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(30), nullable=False, default=AUDIT_TASK_STATUS_PENDING)
    notes = db.Column(db.Text, nullable=True)

    requirement = db.relationship("Requirement", back_populates="audit_tasks")
    # A task is expected to raise at most one issue; the collection keeps
    # older data with several issues loadable.
    issues = db.relationship(
        "Issue", back_populates="audit_task",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="Issue.id",
    )

    @property
    def issue(self):
        """The task's issue (the earliest one if several exist), or None."""
        return self.issues[0] if self.issues else None

    def to_dict(self, include=()):
        d = {
            "id": self.id,
            "requirementId": self.requirement_id,
            "text": self.text,
            "status": self.status,
        }
        put_optional(d, "notes", self.notes)
        if "issues" in include and self.issue is not None:
            d["issue"] = self.issue.to_dict()
        return self._timestamps(d)


class Issue(EntityModel):
    __tablename__ = "issues"
    __label__ = "Issue"

    audit_task_id = db.Column(
        db.Integer,
        db.ForeignKey("audit_tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=True)
    priority = db.Column(db.String(20), nullable=True)
    phase = db.Column(db.String(50), nullable=True)
    estimate_hrs = db.Column(db.Integer, nullable=True)
    status = db.Column(db.String(30), nullable=False, default=ISSUE_STATUS_OPEN)
    type = db.Column(db.String(30), nullable=False, default=ISSUE_TYPE_DEFECT)

    audit_task = db.relationship("AuditTask", back_populates="issues")

    def to_dict(self, include=()):
        # Issues are leaves; ``include`` is accepted for a uniform signature
        d = {
            "id": self.id,
            "auditTaskId": self.audit_task_id,
            "title": self.title,
            "status": self.status,
            "type": self.type,
        }
        put_optional(d, "description", self.description)
        put_optional(d, "priority", self.priority)
        put_optional(d, "phase", self.phase)
        put_optional(d, "estimateHrs", self.estimate_hrs)
        return self._timestamps(d)

    def __repr__(self):
        return f"<Issue {self.id}: {self.title[:40]}>"
