"""
Project service: CRUD, archive and project membership.

    list_projects(filters)          status / clientId equality filters
    get_project(id)                 client, users and requirements loaded
    archive_project(id)             one-way move to ARCHIVED
    assign_user / remove_user       idempotent project_users maintenance
"""

from tessellate.models.project import Project
from tessellate.services import entity_store, lifecycle, relationship_service
from tessellate.services.query_service import PROJECT_DETAIL_LOAD, PROJECT_LIST_LOAD


def create_project(values: dict) -> Project:
    relationship_service.require_optional_client(values.get("client_id"))
    return entity_store.create(Project, lifecycle.apply_create_defaults(Project, values))


def get_project(project_id: int) -> Project:
    return entity_store.get_by_id(Project, project_id, load=PROJECT_DETAIL_LOAD)


def list_projects(filters: dict | None = None) -> list[Project]:
    return entity_store.list_entities(Project, filters, load=PROJECT_LIST_LOAD)


def update_project(project_id: int, patch: dict) -> Project:
    project = entity_store.get_by_id(Project, project_id)
    relationship_service.require_optional_client(patch.get("client_id"))
    return entity_store.apply_patch(project, patch)


def delete_project(project_id: int) -> None:
    """Delete a project with its requirements, audit tasks and issues."""
    entity_store.delete(Project, project_id)


def archive_project(project_id: int) -> Project:
    return lifecycle.archive_project(project_id)


def assign_user(project_id: int, user_id: int) -> bool:
    return relationship_service.assign_user(project_id, user_id)


def remove_user(project_id: int, user_id: int) -> bool:
    return relationship_service.unassign_user(project_id, user_id)


def list_project_users(project_id: int):
    return relationship_service.list_project_users(project_id)


def list_project_issues(project_id: int):
    return relationship_service.list_project_issues(project_id)
