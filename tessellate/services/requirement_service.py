"""
Requirement service.

Requirements always live under a Project. Status is a closed vocabulary
(DRAFT | NOT_MET | MET) and defaults to NOT_MET when omitted.
"""

from tessellate.models.project import Project
from tessellate.models.requirement import Requirement
from tessellate.services import entity_store, lifecycle, relationship_service
from tessellate.services.query_service import REQUIREMENT_LOAD


def create_requirement(project_id: int, values: dict) -> Requirement:
    """Create a requirement under ``project_id`` (404 if the project is missing)."""
    lifecycle.validate_vocabulary(Requirement, values)
    values = lifecycle.apply_create_defaults(Requirement, values)
    return relationship_service.create_child(Requirement, Project, "project_id", project_id, values)


def get_requirement(requirement_id: int) -> Requirement:
    return entity_store.get_by_id(Requirement, requirement_id, load=REQUIREMENT_LOAD)


def list_requirements(filters: dict | None = None) -> list[Requirement]:
    return entity_store.list_entities(Requirement, filters, load=REQUIREMENT_LOAD)


def list_project_requirements(project_id: int) -> list[Requirement]:
    relationship_service.require_parent(Project, project_id)
    return list_requirements({"project_id": project_id})


def update_requirement(requirement_id: int, patch: dict) -> Requirement:
    requirement = entity_store.get_by_id(Requirement, requirement_id)
    lifecycle.validate_vocabulary(Requirement, patch)
    return entity_store.apply_patch(requirement, patch)


def delete_requirement(requirement_id: int) -> None:
    entity_store.delete(Requirement, requirement_id)
