"""
Entity store: generic single-record operations over the tracked models.

    create(model, values)              -> entity    | StoreError
    get_by_id(model, id, load)         -> entity    | NotFoundError
    update(model, id, patch)           -> entity    | NotFoundError, StoreError
    apply_patch(entity, patch)         -> entity    | StoreError
    delete(model, id)                  -> None      | NotFoundError, StoreError
    list_entities(model, filters, load) -> [entity] (ordered by id)

Every write commits immediately; there is no multi-statement transaction
contract here. Soft-deleted rows are invisible to every read.
"""

from __future__ import annotations

import logging

from tessellate.core.exceptions import NotFoundError
from tessellate.models import db
from tessellate.services.query_service import NO_RELATIONS, equality_filters, load_options
from tessellate.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)


def _label(model) -> str:
    return getattr(model, "__label__", model.__name__)


def create(model, values: dict):
    """Insert one row built from ``values`` and return the persisted entity."""
    entity = model(**values)
    db.session.add(entity)
    commit_or_raise(f"Failed to create {_label(model).lower()}")
    logger.info("Created %s id=%s", model.__name__, entity.id)
    return entity


def get_by_id(model, pk: int, load=NO_RELATIONS):
    """Fetch a live row by primary key with ``load`` eager-loaded."""
    entity = (
        model.query_active()
        .options(*load_options(model, load))
        .filter(model.id == pk)
        .first()
    )
    if entity is None:
        raise NotFoundError(resource=_label(model), resource_id=pk)
    return entity


def update(model, pk: int, patch: dict):
    """Apply a partial patch to the row with primary key ``pk``."""
    return apply_patch(get_by_id(model, pk), patch)


def apply_patch(entity, patch: dict):
    """Apply a partial patch to an entity already fetched by the caller.

    Keys missing from ``patch`` and keys whose value is ``None`` leave the
    stored value untouched.
    """
    model = type(entity)
    changed = []
    for attr, value in patch.items():
        if value is None:
            continue
        setattr(entity, attr, value)
        changed.append(attr)
    commit_or_raise(f"Failed to update {_label(model).lower()}")
    logger.info("Updated %s id=%s fields=%s", model.__name__, entity.id, ",".join(changed) or "-")
    return entity


def delete(model, pk: int) -> None:
    """Hard-delete a live row; children go with it per the FK rules."""
    entity = get_by_id(model, pk)
    db.session.delete(entity)
    commit_or_raise(f"Failed to delete {_label(model).lower()}")
    logger.info("Deleted %s id=%s", model.__name__, pk)


def list_entities(model, filters: dict | None = None, load=NO_RELATIONS) -> list:
    """List live rows matching simple equality ``filters``, ordered by id."""
    return (
        model.query_active()
        .options(*load_options(model, load))
        .filter(*equality_filters(model, filters))
        .order_by(model.id)
        .all()
    )
