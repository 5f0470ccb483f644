"""
Test configuration and fixtures.

Provides:
- A fresh in-memory SQLite record store per test
- A TestClient bound to the application
- Registered and logged-in accounts with their bearer headers
"""
import os
import uuid
from dataclasses import dataclass
from typing import Callable, Generator

# Must be set before the application settings are first imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import scheduler_api.models  # noqa: F401
from scheduler_api.core.config import settings
from scheduler_api.db import engine
from scheduler_api.main import app
from scheduler_api.services.store import RecordStore

API = settings.API_V1_STR


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_database() -> Generator[None, None, None]:
    """Recreate every table so each test starts from an empty store."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture(scope="function")
def store() -> Generator[RecordStore, None, None]:
    with Session(engine) as session:
        yield RecordStore(session)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@dataclass
class Account:
    """A registered account plus the token from its latest login."""
    id: str
    name: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return bearer(self.token)


def bearer(token: str) -> dict[str, str]:
    return {"authorization": f"Bearer {token}"}


def register(client: TestClient, name: str, email: str, password: str = "password123", **extra) -> dict:
    response = client.post(f"{API}/users", json={"name": name, "email": email, "password": password, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def login(client: TestClient, email: str, password: str = "password123") -> str:
    response = client.post(f"{API}/sessions", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["token"]


@pytest.fixture(scope="function")
def make_account(client: TestClient) -> Callable[..., Account]:
    def _make(name: str = "Test User", password: str = "password123", **extra) -> Account:
        email = f"test-{uuid.uuid4().hex[:8]}@example.com"
        created = register(client, name, email, password, **extra)
        token = login(client, email, password)
        return Account(id=created["id"], name=name, email=email, password=password, token=token)

    return _make


@pytest.fixture(scope="function")
def alice(make_account) -> Account:
    return make_account("Alice")


@pytest.fixture(scope="function")
def bob(make_account) -> Account:
    return make_account("Bob")


def assert_error(response, status_code: int, code: str) -> dict:
    """Check the error envelope and return its body."""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["code"] == code
    assert isinstance(body["message"], str) and body["message"]
    return body
