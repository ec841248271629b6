"""Shared fixtures: a fresh SQLite database per test and token helpers."""

import pytest
from fastapi.testclient import TestClient

from conference_central_api.app.core.config import settings
from conference_central_api.app.core.datastore import SQLiteDatastore
from conference_central_api.app.core.db import init_db
from conference_central_api.app.core.security import Identity, create_access_token
from conference_central_api.app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = str(tmp_path / "conference_central.db")
    monkeypatch.setattr(settings, "database_url", path)
    init_db(path)
    return path


@pytest.fixture
def datastore(db_path):
    return SQLiteDatastore(db_path)


@pytest.fixture
def alice():
    return Identity(user_id="alice-id", email="alice@example.com")


@pytest.fixture
def bob():
    return Identity(user_id="bob-id", email="bob@example.org")


@pytest.fixture
def client(db_path):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def make(identity, **claims):
        payload = {"sub": identity.user_id, "email": identity.email}
        payload.update(claims)
        return {"Authorization": f"Bearer {create_access_token(payload)}"}

    return make
