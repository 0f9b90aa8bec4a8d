"""
Tests: Project API.

Covers:
    - Project CRUD and default status
    - Partial update
    - Archive (unconditional, repeatable)
    - Detail projection with client / users / requirements, soft-deleted
      children left out
    - Filtering by status and clientId
    - Path id parsing
"""

from tessellate.models import db
from tessellate.models.project import Project
from tessellate.models.requirement import Requirement


def _create_project(client, **kw):
    payload = {"name": "Test Project", "clientName": "Test Client"}
    payload.update(kw)
    res = client.post("/api/v1/projects", json=payload)
    assert res.status_code == 201
    return res.get_json()


# ═════════════════════════════════════════════════════════════════════════════
# CRUD
# ═════════════════════════════════════════════════════════════════════════════

def test_create_project_defaults_to_new(client):
    data = _create_project(client)
    assert data["status"] == "NEW"
    assert data["name"] == "Test Project"
    assert data["clientName"] == "Test Client"
    assert "clientId" not in data
    assert "createdAt" in data and "updatedAt" in data


def test_create_project_keeps_explicit_status(client):
    data = _create_project(client, status="IN_PROGRESS")
    assert data["status"] == "IN_PROGRESS"


def test_create_project_missing_name(client):
    res = client.post("/api/v1/projects", json={"clientName": "X"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["code"] == 400
    assert body["message"] == "name is required"


def test_create_project_wrong_type(client):
    res = client.post("/api/v1/projects", json={"name": "P", "clientId": "abc"})
    assert res.status_code == 400


def test_create_project_unknown_client(client):
    res = client.post("/api/v1/projects", json={"name": "P", "clientId": 999})
    assert res.status_code == 404
    assert Project.query.count() == 0


def test_create_project_linked_to_client(client, client_org):
    data = _create_project(client, clientId=client_org["id"])
    assert data["clientId"] == client_org["id"]


def test_get_project(client, project):
    res = client.get(f"/api/v1/projects/{project['id']}")
    assert res.status_code == 200
    assert res.get_json()["name"] == "ISO Audit"


def test_get_project_not_found(client):
    res = client.get("/api/v1/projects/9999")
    assert res.status_code == 404
    assert res.get_json() == {"error": "Project not found", "code": 404}


def test_get_project_invalid_id(client):
    res = client.get("/api/v1/projects/abc")
    assert res.status_code == 400
    assert res.get_json()["error"] == "Invalid project ID"


def test_get_project_non_ascii_digit_id(client):
    res = client.get("/api/v1/projects/\u00b2")
    assert res.status_code == 400
    assert res.get_json()["error"] == "Invalid project ID"


def test_get_project_oversized_id(client):
    for raw in ("4294967296", "99999999999999999999999"):
        res = client.get(f"/api/v1/projects/{raw}")
        assert res.status_code == 400
        assert res.get_json()["error"] == "Invalid project ID"


def test_list_projects(client):
    _create_project(client, name="P1")
    _create_project(client, name="P2")
    res = client.get("/api/v1/projects")
    assert res.status_code == 200
    assert [p["name"] for p in res.get_json()] == ["P1", "P2"]


def test_list_projects_empty(client):
    res = client.get("/api/v1/projects")
    assert res.status_code == 200
    assert res.get_json() == []


def test_list_projects_has_no_relations(client, requirement):
    data = client.get("/api/v1/projects").get_json()
    assert "requirements" not in data[0]
    assert "users" not in data[0]


def test_list_projects_filter_status(client):
    _create_project(client, name="Open")
    archived = _create_project(client, name="Old")
    client.post(f"/api/v1/projects/{archived['id']}/archive")
    res = client.get("/api/v1/projects?status=ARCHIVED")
    assert [p["name"] for p in res.get_json()] == ["Old"]


def test_list_projects_filter_client(client, client_org):
    _create_project(client, name="Mine", clientId=client_org["id"])
    _create_project(client, name="Other")
    res = client.get(f"/api/v1/projects?clientId={client_org['id']}")
    assert [p["name"] for p in res.get_json()] == ["Mine"]


def test_list_projects_filter_bad_client_id(client):
    res = client.get("/api/v1/projects?clientId=x")
    assert res.status_code == 400
    assert res.get_json()["error"] == "Invalid client ID"


def test_update_project_partial(client, project):
    res = client.put(f"/api/v1/projects/{project['id']}", json={"name": "Renamed"})
    assert res.status_code == 200
    data = res.get_json()
    assert data["name"] == "Renamed"
    assert data["clientName"] == project["clientName"]
    assert data["status"] == project["status"]


def test_update_project_null_is_absent(client, project):
    res = client.put(f"/api/v1/projects/{project['id']}", json={"name": None, "status": "ACTIVE"})
    data = res.get_json()
    assert data["name"] == "ISO Audit"
    assert data["status"] == "ACTIVE"


def test_update_project_not_found(client):
    res = client.put("/api/v1/projects/9999", json={"name": "X"})
    assert res.status_code == 404


def test_delete_project(client, project):
    res = client.delete(f"/api/v1/projects/{project['id']}")
    assert res.status_code == 200
    assert res.get_json() == {"message": "Project deleted successfully"}
    assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404


def test_delete_project_cascades_requirements(client, project, requirement, audit_task):
    client.post(f"/api/v1/audit-tasks/{audit_task['id']}/issues", json={"title": "Gap"})
    client.delete(f"/api/v1/projects/{project['id']}")
    assert Requirement.query.count() == 0
    assert client.get(f"/api/v1/audit-tasks/{audit_task['id']}").status_code == 404
    assert client.get("/api/v1/issues").get_json() == []


def test_delete_project_not_found(client):
    assert client.delete("/api/v1/projects/9999").status_code == 404


def test_soft_deleted_project_is_hidden(client, project):
    row = db.session.get(Project, project["id"])
    row.soft_delete()
    db.session.commit()
    assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404
    assert client.get("/api/v1/projects").get_json() == []


# ═════════════════════════════════════════════════════════════════════════════
# ARCHIVE
# ═════════════════════════════════════════════════════════════════════════════

def test_archive_project(client, project):
    res = client.post(f"/api/v1/projects/{project['id']}/archive")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ARCHIVED"


def test_archive_from_any_status(client):
    p = _create_project(client, status="ON_HOLD")
    res = client.post(f"/api/v1/projects/{p['id']}/archive")
    assert res.get_json()["status"] == "ARCHIVED"


def test_archive_twice_is_safe(client, project):
    client.post(f"/api/v1/projects/{project['id']}/archive")
    res = client.post(f"/api/v1/projects/{project['id']}/archive")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ARCHIVED"


def test_archive_not_found(client):
    assert client.post("/api/v1/projects/9999/archive").status_code == 404


# ═════════════════════════════════════════════════════════════════════════════
# DETAIL PROJECTION
# ═════════════════════════════════════════════════════════════════════════════

def test_project_detail_omits_empty_relations(client, project):
    data = client.get(f"/api/v1/projects/{project['id']}").get_json()
    assert "client" not in data
    assert "users" not in data
    assert "requirements" not in data


def test_project_detail_includes_loaded_relations(client, client_org, user):
    p = _create_project(client, clientId=client_org["id"])
    client.post(f"/api/v1/projects/{p['id']}/requirements", json={"text": "R1"})
    client.post(f"/api/v1/projects/{p['id']}/users/{user['id']}")

    data = client.get(f"/api/v1/projects/{p['id']}").get_json()
    assert data["client"]["name"] == "Acme Corp"
    assert [u["email"] for u in data["users"]] == ["bob@example.com"]
    assert [r["text"] for r in data["requirements"]] == ["R1"]
    # nested projections stay one level deep
    assert "auditTasks" not in data["requirements"][0]
    assert "projects" not in data["users"][0]


def test_project_detail_hides_soft_deleted_children(client, project, requirement):
    client.post(f"/api/v1/projects/{project['id']}/requirements", json={"text": "Still here"})
    row = db.session.get(Requirement, requirement["id"])
    row.soft_delete()
    db.session.commit()

    data = client.get(f"/api/v1/projects/{project['id']}").get_json()
    assert [r["text"] for r in data["requirements"]] == ["Still here"]


def test_project_detail_omits_relation_when_only_soft_deleted_rows(client, project, requirement):
    row = db.session.get(Requirement, requirement["id"])
    row.soft_delete()
    db.session.commit()
    assert "requirements" not in client.get(f"/api/v1/projects/{project['id']}").get_json()


def test_project_issues(client, project, audit_task):
    client.post(f"/api/v1/audit-tasks/{audit_task['id']}/issues", json={"title": "Weak cipher"})
    other = _create_project(client, name="Other")
    res = client.get(f"/api/v1/projects/{project['id']}/issues")
    assert res.status_code == 200
    assert [i["title"] for i in res.get_json()] == ["Weak cipher"]
    assert client.get(f"/api/v1/projects/{other['id']}/issues").get_json() == []


def test_project_issues_missing_project(client):
    assert client.get("/api/v1/projects/9999/issues").status_code == 404
