"""
Shared pytest fixtures for the Tessellate Projects test suite.

Provides:
    - app: Flask application (session-scoped, in-memory SQLite)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test app context; tables dropped and recreated afterwards (autouse)
    - client: Flask test client
    - client_org, project, requirement, audit_task, user: rows created via the API
"""

import pytest

from tessellate import create_app
from tessellate.models import db as _db


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


def _post(client, url, payload):
    res = client.post(url, json=payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()


@pytest.fixture()
def client_org(client):
    """A Client (the audited organisation) created via the API."""
    return _post(client, "/api/v1/clients", {"name": "Acme Corp", "industry": "Retail"})


@pytest.fixture()
def project(client):
    return _post(client, "/api/v1/projects", {"name": "ISO Audit", "clientName": "Acme"})


@pytest.fixture()
def requirement(client, project):
    return _post(
        client,
        f"/api/v1/projects/{project['id']}/requirements",
        {"text": "Must encrypt data at rest", "category": "Security"},
    )


@pytest.fixture()
def audit_task(client, requirement):
    return _post(
        client,
        f"/api/v1/requirements/{requirement['id']}/audit-tasks",
        {"text": "Inspect disk encryption settings"},
    )


@pytest.fixture()
def user(client):
    return _post(
        client,
        "/api/v1/users",
        {"name": "Bob Auditor", "email": "bob@example.com", "role": "CONSULTANT", "password": "s3cret-pass"},
    )
