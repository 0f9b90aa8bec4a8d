"""
Auth Models: users, roles and the project membership join table.

Users optionally belong to one Client and are linked to Projects through
``project_users``, a pure association table (no id, no extra columns).
"""

from tessellate.models import db
from tessellate.models.base import EntityModel, put_optional


# ── Roles (closed vocabulary) ────────────────────────────────────────────────

ROLE_ADMIN = "ADMIN"
ROLE_CONSULTANT = "CONSULTANT"
ROLE_CLIENT = "CLIENT"

USER_ROLES = (ROLE_ADMIN, ROLE_CONSULTANT, ROLE_CLIENT)


# ═══════════════════════════════════════════════════════════════
# PROJECT_USERS (Junction table)
# ═══════════════════════════════════════════════════════════════
project_users = db.Table(
    "project_users",
    db.Column(
        "project_id", db.Integer,
        db.ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "user_id", db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# ═══════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════
class User(EntityModel):
    __tablename__ = "users"
    __label__ = "User"

    name = db.Column(db.String(200), nullable=False)
    # Unique in practice only; duplicates are not rejected at this layer
    email = db.Column(db.String(200), nullable=False, index=True)
    password_hash = db.Column(db.String(256))  # NULL until a password is set
    role = db.Column(db.String(20), nullable=False, comment="ADMIN | CONSULTANT | CLIENT")
    client_id = db.Column(
        db.Integer,
        db.ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    client = db.relationship("Client", back_populates="users")
    projects = db.relationship(
        "Project", secondary=project_users, back_populates="users",
        order_by="Project.id",
    )

    def to_dict(self, include=()):
        d = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
        put_optional(d, "clientId", self.client_id)
        if "client" in include and self.client is not None:
            d["client"] = self.client.to_dict()
        if "projects" in include and self.projects:
            d["projects"] = [p.to_dict() for p in self.projects]
        return self._timestamps(d)
