"""Project domain model for the Client -> Project -> Requirement hierarchy."""

from tessellate.models import db
from tessellate.models.auth import project_users
from tessellate.models.base import EntityModel, put_optional


# Suggested values only; project status is an open string
PROJECT_STATUS_NEW = "NEW"
PROJECT_STATUS_ARCHIVED = "ARCHIVED"


class Project(EntityModel):
    """Audit engagement for a client. Owns Requirements; staffed by Users."""

    __tablename__ = "projects"
    __label__ = "Project"

    name = db.Column(db.String(200), nullable=False)
    client_name = db.Column(
        db.String(200), nullable=False, default="",
        comment="Display name of the client, kept independently of client_id",
    )
    status = db.Column(
        db.String(20), nullable=False, default=PROJECT_STATUS_NEW, index=True,
        comment="NEW | ARCHIVED | any caller-defined value",
    )
    client_id = db.Column(
        db.Integer,
        db.ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ── Relationships ──
    client = db.relationship("Client", back_populates="projects")
    users = db.relationship(
        "User", secondary=project_users, back_populates="projects",
        order_by="User.id",
    )
    requirements = db.relationship(
        "Requirement", back_populates="project",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="Requirement.id",
    )

    def to_dict(self, include=()) -> dict:
        """Serialize the project plus whichever relations were loaded."""
        d = {
            "id": self.id,
            "name": self.name,
            "clientName": self.client_name,
            "status": self.status,
        }
        put_optional(d, "clientId", self.client_id)
        if "client" in include and self.client is not None:
            d["client"] = self.client.to_dict()
        if "users" in include and self.users:
            d["users"] = [u.to_dict() for u in self.users]
        if "requirements" in include and self.requirements:
            d["requirements"] = [r.to_dict() for r in self.requirements]
        return self._timestamps(d)

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.name}>"
