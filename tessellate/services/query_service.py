"""
Query / projection layer.

Each read operation names a *load set*: the relationships to eager-load
for that call. The same load set is handed to ``to_dict(include=...)``, so a
relation appears in the response only when it was loaded for that call
**and** holds at least one row. A relation that was not loaded, or was
loaded but is empty, is omitted; callers never see an empty list.

Load sets (relationship attribute names):

    Client  list/detail     users, projects
    Project list            -
    Project detail          client, users, requirements
    User    list            client
    User    detail          client, projects
    Requirement list/detail audit_tasks
    AuditTask list/detail   issues  (projected as the single "issue")
    Issue   list/detail     -
"""

from sqlalchemy.orm import selectinload, with_loader_criteria

from tessellate.core.exceptions import ValidationError
from tessellate.models.soft_delete import SoftDeleteMixin

NO_RELATIONS: tuple[str, ...] = ()

CLIENT_LOAD = ("users", "projects")
PROJECT_LIST_LOAD = NO_RELATIONS
PROJECT_DETAIL_LOAD = ("client", "users", "requirements")
USER_LIST_LOAD = ("client",)
USER_DETAIL_LOAD = ("client", "projects")
REQUIREMENT_LOAD = ("audit_tasks",)
AUDIT_TASK_LOAD = ("issues",)
ISSUE_LOAD = NO_RELATIONS


def load_options(model, load):
    """Translate a load set into ``selectinload`` options for ``model``.

    Soft-deleted rows are filtered out of every relation loaded this way,
    including lazy loads triggered later on the returned entities.
    """
    options = [
        with_loader_criteria(SoftDeleteMixin, lambda cls: cls.deleted_at.is_(None), include_aliases=True),
    ]
    for name in load:
        attr = getattr(model, name, None)
        if attr is None or not hasattr(attr, "property"):
            raise ValueError(f"{model.__name__} has no relationship {name!r}")
        options.append(selectinload(attr))
    return options


def equality_filters(model, filters):
    """Build ``column == value`` predicates, skipping ``None`` values.

    Only real columns of ``model`` may be filtered on.
    """
    predicates = []
    for column_name, value in (filters or {}).items():
        if value is None:
            continue
        column = model.__table__.columns.get(column_name)
        if column is None:
            raise ValidationError("Invalid request", f"Cannot filter on {column_name!r}")
        predicates.append(column == value)
    return predicates


def project(entity, load=NO_RELATIONS) -> dict:
    """Projection of a single entity with the relations in ``load``."""
    return entity.to_dict(include=load)


def project_all(entities, load=NO_RELATIONS) -> list[dict]:
    """Projection of a sequence, preserving order."""
    return [entity.to_dict(include=load) for entity in entities]
