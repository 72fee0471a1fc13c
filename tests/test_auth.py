import asyncio
import sqlite3

import pytest

from series_tracker_api.app.core.config import settings
from series_tracker_api.app.core.errors import InternalError
from series_tracker_api.app.core.security import hash_password, verify_password
from series_tracker_api.app.schemas.user import RegisterInput
from series_tracker_api.app.services.user_service import UserService


def register(client, name="Ana", email="ana@example.com", password="secret1"):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def test_register_returns_identity_without_hash(client):
    response = register(client, name="  Ana  ", email=" Ana@Example.com ")
    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "name", "email"}
    assert body["name"] == "Ana"
    assert body["email"] == "ana@example.com"


def test_password_is_stored_hashed(client, db_path):
    register(client)
    conn = sqlite3.connect(db_path)
    try:
        stored = conn.execute("SELECT password_hash FROM users").fetchone()[0]
    finally:
        conn.close()
    assert stored != "secret1"
    assert verify_password("secret1", stored)


def test_duplicate_email_is_a_conflict_regardless_of_case(client):
    assert register(client, email="ana@example.com").status_code == 201
    response = register(client, name="Other", email="ANA@example.COM")
    assert response.status_code == 409
    assert response.json() == {"error": "email already registered"}


def test_register_validation(client):
    response = register(client, password="123")
    assert response.status_code == 400
    assert response.json() == {"error": "password must have at least 6 characters"}
    assert register(client, email="no-at-sign").json() == {"error": "valid email is required"}


def test_login_returns_same_identity(client):
    created = register(client).json()
    response = client.post("/api/auth/login", json={"email": " ANA@example.com", "password": "secret1"})
    assert response.status_code == 200
    assert response.json() == created


def test_login_failures_are_indistinguishable(client):
    register(client)
    unknown = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret1"})
    wrong = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong-pass"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"error": "invalid credentials"}


def test_login_requires_email_and_password(client):
    response = client.post("/api/auth/login", json={"email": "ana@example.com"})
    assert response.status_code == 400
    assert response.json() == {"error": "email and password are required"}


def test_storage_failure_is_an_internal_error(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_path", str(tmp_path / "missing" / "tracker.db"))
    with pytest.raises(InternalError, match="failed to create user"):
        asyncio.run(UserService.register(RegisterInput(name="Ana", email="a@b.c", password="secret1")))


def test_verify_password_rejects_malformed_hash():
    assert verify_password("secret1", hash_password("secret1"))
    assert not verify_password("secret1", "not-a-hash")
    assert not verify_password("secret1", hash_password("secret2"))
