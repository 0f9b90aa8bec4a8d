"""
Tests: User API and Project ↔ User membership.

Covers:
    - User CRUD, role vocabulary, email validation
    - Password never projected
    - Assign / unassign idempotency
    - /projects/<id>/users and /users/<id>/projects
"""

import pytest

from tessellate.models import db
from tessellate.models.auth import User
from tessellate.services.relationship_service import count_links


def _create_user(client, **kw):
    payload = {"name": "Erin", "email": "erin@example.com", "role": "ADMIN"}
    payload.update(kw)
    return client.post("/api/v1/users", json=payload)


# ═════════════════════════════════════════════════════════════════════════════
# USERS
# ═════════════════════════════════════════════════════════════════════════════

def test_create_user(client):
    res = _create_user(client)
    assert res.status_code == 201
    data = res.get_json()
    assert data["role"] == "ADMIN"
    assert data["email"] == "erin@example.com"
    assert "password" not in data
    assert "passwordHash" not in data
    assert "clientId" not in data


@pytest.mark.parametrize("role", ["ADMIN", "CONSULTANT", "CLIENT"])
def test_create_user_roles(client, role):
    assert _create_user(client, role=role).status_code == 201


def test_create_user_bad_role(client):
    res = _create_user(client, role="SUPERUSER")
    assert res.status_code == 400
    assert User.query.count() == 0


def test_create_user_bad_email(client):
    res = _create_user(client, email="not-an-email")
    assert res.status_code == 400


def test_create_user_email_lowercased(client):
    data = _create_user(client, email="Erin.Smith@Example.COM").get_json()
    assert data["email"] == "erin.smith@example.com"


def test_create_user_missing_role(client):
    res = client.post("/api/v1/users", json={"name": "X", "email": "x@example.com"})
    assert res.status_code == 400


def test_create_user_hashes_password(client, user):
    row = db.session.get(User, user["id"])
    assert row.password_hash
    assert row.password_hash != "s3cret-pass"


def test_create_user_without_password(client):
    data = _create_user(client).get_json()
    assert db.session.get(User, data["id"]).password_hash is None


def test_update_user_role(client, user):
    res = client.put(f"/api/v1/users/{user['id']}", json={"role": "CLIENT"})
    assert res.status_code == 200
    assert res.get_json()["role"] == "CLIENT"
    assert res.get_json()["name"] == "Bob Auditor"


def test_update_user_bad_role(client, user):
    res = client.put(f"/api/v1/users/{user['id']}", json={"role": "ROOT"})
    assert res.status_code == 400
    assert db.session.get(User, user["id"]).role == "CONSULTANT"


def test_user_detail_with_client_and_projects(client, client_org, project):
    u = _create_user(client, clientId=client_org["id"]).get_json()
    client.post(f"/api/v1/projects/{project['id']}/users/{u['id']}")

    data = client.get(f"/api/v1/users/{u['id']}").get_json()
    assert data["clientId"] == client_org["id"]
    assert data["client"]["name"] == "Acme Corp"
    assert [p["name"] for p in data["projects"]] == ["ISO Audit"]


def test_user_list_loads_client_only(client, client_org, project):
    u = _create_user(client, clientId=client_org["id"]).get_json()
    client.post(f"/api/v1/projects/{project['id']}/users/{u['id']}")

    listed = client.get("/api/v1/users").get_json()
    assert listed[0]["client"]["name"] == "Acme Corp"
    assert "projects" not in listed[0]


def test_user_list_filter_client(client, client_org):
    _create_user(client, clientId=client_org["id"])
    _create_user(client, name="Frank", email="frank@example.com")
    listed = client.get(f"/api/v1/users?clientId={client_org['id']}").get_json()
    assert [u["name"] for u in listed] == ["Erin"]


def test_delete_user(client, user, project):
    client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    res = client.delete(f"/api/v1/users/{user['id']}")
    assert res.status_code == 200
    assert count_links(project["id"], user["id"]) == 0
    assert client.get(f"/api/v1/users/{user['id']}").status_code == 404


# ═════════════════════════════════════════════════════════════════════════════
# MEMBERSHIP
# ═════════════════════════════════════════════════════════════════════════════

def test_assign_user(client, project, user):
    res = client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    assert res.status_code == 200
    assert res.get_json() == {"message": "User assigned to project successfully"}
    assert count_links(project["id"], user["id"]) == 1


def test_assign_user_twice_keeps_one_link(client, project, user):
    client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    res = client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    assert res.status_code == 200
    assert count_links(project["id"], user["id"]) == 1


def test_assign_missing_user(client, project):
    res = client.post(f"/api/v1/projects/{project['id']}/users/9999")
    assert res.status_code == 404
    assert res.get_json()["error"] == "User not found"


def test_assign_missing_project(client, user):
    assert client.post(f"/api/v1/projects/9999/users/{user['id']}").status_code == 404


def test_assign_invalid_user_id(client, project):
    res = client.post(f"/api/v1/projects/{project['id']}/users/abc")
    assert res.status_code == 400
    assert res.get_json()["error"] == "Invalid user ID"


def test_unassign_user(client, project, user):
    client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    res = client.delete(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    assert res.status_code == 200
    assert count_links(project["id"], user["id"]) == 0


def test_unassign_missing_link_is_ok(client, project, user):
    res = client.delete(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    assert res.status_code == 200
    assert res.get_json() == {"message": "User removed from project successfully"}


def test_unassign_missing_user(client, project):
    assert client.delete(f"/api/v1/projects/{project['id']}/users/9999").status_code == 404


def test_project_users_listing(client, client_org, project):
    u = _create_user(client, clientId=client_org["id"]).get_json()
    client.post(f"/api/v1/projects/{project['id']}/users/{u['id']}")

    res = client.get(f"/api/v1/projects/{project['id']}/users")
    assert res.status_code == 200
    data = res.get_json()
    assert [x["id"] for x in data] == [u["id"]]
    assert data[0]["client"]["name"] == "Acme Corp"


def test_project_users_missing_project(client):
    assert client.get("/api/v1/projects/9999/users").status_code == 404


def test_user_projects_listing(client, project, user):
    client.post(f"/api/v1/projects/{project['id']}/users/{user['id']}")
    data = client.get(f"/api/v1/users/{user['id']}/projects").get_json()
    assert [p["name"] for p in data] == ["ISO Audit"]


def test_user_projects_missing_user(client):
    assert client.get("/api/v1/users/9999/projects").status_code == 404
