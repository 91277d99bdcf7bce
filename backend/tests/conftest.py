# Shared fixtures: app wired to an in-memory MongoDB (mongomock-motor), no real server needed

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from fintrack.core.config import Settings
from fintrack.main import create_app

TEST_SECRET = "test-secret-key-for-testing-only-0123456789abcdef"


def make_settings(**overrides) -> Settings:
    values = {
        "MONGODB_URI": "mongodb://localhost:27017/fintrack_test",
        "JWT_SECRET_KEY": TEST_SECRET,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_client(settings: Settings) -> TestClient:
    database = AsyncMongoMockClient()["fintrack_test"]
    return TestClient(create_app(settings, database=database))


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    with make_client(settings) as c:
        yield c


@pytest.fixture
def owner_scoped_client():
    with make_client(make_settings(ENFORCE_ENTRY_OWNERSHIP=True)) as c:
        yield c


def register(client, email="a@x.com", password="secret", full_name="A"):
    r = client.post(
        "/api/v1/auth/register",
        json={"fullName": full_name, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    return r.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    return bearer(register(client, "alice@x.com")["token"])


@pytest.fixture
def bob(client):
    return bearer(register(client, "bob@x.com")["token"])
