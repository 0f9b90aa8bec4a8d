"""Client domain model: the top of the ownership hierarchy."""

from tessellate.models import db
from tessellate.models.base import EntityModel, put_optional


class Client(EntityModel):
    """Organisation being audited. Owns Users and Projects (both optional links)."""

    __tablename__ = "clients"
    __label__ = "Client"

    name = db.Column(db.String(200), nullable=False)
    industry = db.Column(db.String(100), nullable=True)
    contact_name = db.Column(db.String(200), nullable=True)
    contact_email = db.Column(db.String(200), nullable=True)

    # clients.id is referenced with ON DELETE SET NULL; let the database do it
    users = db.relationship(
        "User", back_populates="client", passive_deletes=True, order_by="User.id",
    )
    projects = db.relationship(
        "Project", back_populates="client", passive_deletes=True, order_by="Project.id",
    )

    def to_dict(self, include=()):
        d = {"id": self.id, "name": self.name}
        put_optional(d, "industry", self.industry)
        put_optional(d, "contactName", self.contact_name)
        put_optional(d, "contactEmail", self.contact_email)
        if "users" in include and self.users:
            d["users"] = [u.to_dict() for u in self.users]
        if "projects" in include and self.projects:
            d["projects"] = [p.to_dict() for p in self.projects]
        return self._timestamps(d)
