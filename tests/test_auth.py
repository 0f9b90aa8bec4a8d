"""
Tests: login.

Covers:
    - Successful login returns the mock token and user projection
    - Unknown email, wrong password and password-less users share one 401
    - Malformed bodies are 400
"""

import pytest

from tessellate.core.exceptions import AuthError
from tessellate.services import user_service
from tessellate.utils.crypto import hash_password, verify_password


def _login(client, email, password):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def test_login_success(client, user):
    res = _login(client, "bob@example.com", "s3cret-pass")
    assert res.status_code == 200
    body = res.get_json()
    assert body["token"] == f"mock-token-{user['id']}"
    assert body["user"]["id"] == user["id"]
    assert body["user"]["email"] == "bob@example.com"
    assert "passwordHash" not in body["user"]


def test_login_email_case_insensitive(client, user):
    assert _login(client, "Bob@Example.com", "s3cret-pass").status_code == 200


@pytest.mark.parametrize("email,password", [
    ("bob@example.com", "wrong-pass"),
    ("nobody@example.com", "s3cret-pass"),
])
def test_login_failures_are_uniform(client, user, email, password):
    res = _login(client, email, password)
    assert res.status_code == 401
    assert res.get_json() == {"error": "Invalid credentials", "code": 401}


def test_login_user_without_password(client):
    client.post("/api/v1/users", json={"name": "NoPw", "email": "nopw@example.com", "role": "CLIENT"})
    res = _login(client, "nopw@example.com", "anything")
    assert res.status_code == 401
    assert res.get_json()["error"] == "Invalid credentials"


def test_login_missing_fields(client):
    assert client.post("/api/v1/auth/login", json={"email": "bob@example.com"}).status_code == 400
    assert client.post("/api/v1/auth/login", json={}).status_code == 400


def test_login_malformed_email(client):
    assert _login(client, "not-an-email", "x").status_code == 400


def test_login_after_password_change(client, user):
    client.put(f"/api/v1/users/{user['id']}", json={"password": "new-pass-123"})
    assert _login(client, "bob@example.com", "s3cret-pass").status_code == 401
    assert _login(client, "bob@example.com", "new-pass-123").status_code == 200


# ── Service / crypto ─────────────────────────────────────────────────────

def test_authenticate_raises_auth_error(user):
    with pytest.raises(AuthError):
        user_service.authenticate("bob@example.com", "nope")


def test_issue_token(user):
    row = user_service.authenticate("bob@example.com", "s3cret-pass")
    assert user_service.issue_token(row) == f"mock-token-{row.id}"


def test_password_hashing_roundtrip():
    hashed = hash_password("correct horse")
    assert verify_password("correct horse", hashed)
    assert not verify_password("battery staple", hashed)
    assert not verify_password("correct horse", None)
    assert not verify_password("correct horse", "not-a-bcrypt-hash")
