"""
Client service: CRUD for the organisations being audited.

Listing and detail both eager-load the client's users and projects.
"""

from tessellate.models.client import Client
from tessellate.services import entity_store
from tessellate.services.query_service import CLIENT_LOAD


def create_client(values: dict) -> Client:
    return entity_store.create(Client, values)


def get_client(client_id: int) -> Client:
    return entity_store.get_by_id(Client, client_id, load=CLIENT_LOAD)


def list_clients() -> list[Client]:
    return entity_store.list_entities(Client, load=CLIENT_LOAD)


def update_client(client_id: int, patch: dict) -> Client:
    return entity_store.update(Client, client_id, patch)


def delete_client(client_id: int) -> None:
    """Delete a client. Its users and projects survive with ``client_id`` cleared."""
    entity_store.delete(Client, client_id)
