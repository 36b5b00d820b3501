"""Test fixtures: one app per test, each with its own in-memory SQLite database.

TestingConfig points DATABASE_URL at "sqlite://"; DBStorage uses a StaticPool
for that URL so every session in the test sees the same database. Dropping the
tables afterwards releases the connection.
"""

import uuid

import pytest

from api import create_app
from api.state import EXTENSION_KEY


@pytest.fixture()
def app(tmp_path):
    (tmp_path / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    app = create_app("testing", {"FILESERVER_ROOT": str(tmp_path)})
    yield app
    app.extensions[EXTENSION_KEY].storage.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def storage(app):
    storage = app.extensions[EXTENSION_KEY].storage
    yield storage
    storage.close()


def unique_email(prefix="user"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email=None, password="04234-secret"):
    email = email or unique_email()
    r = client.post("/api/users", json={"email": email, "password": password})
    assert r.status_code == 201, r.get_json()
    return r.get_json()["data"], password


def login(client, email, password):
    r = client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.get_json()
    return r.get_json()


@pytest.fixture()
def user_session(client):
    """A registered, logged-in user: (user dict, access token, refresh token)."""
    user, password = register(client)
    tokens = login(client, user["email"], password)
    return user, tokens["access_token"], tokens["refresh_token"]
