"""
Shared fixtures for the Menu Management API test suite.

Every test gets a fresh file-backed SQLite database, the real application behind a
TestClient, and a recording notifier in place of the WebSocket broadcaster.
"""

import os
import tempfile
from types import SimpleNamespace

# Settings are read when the application is imported
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_CREATE_TABLES"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_FORMAT"] = "text"
os.environ["SEED_DEFAULT_ROLES"] = "true"
os.environ["ADMIN_EMAIL"] = "admin@menu.local"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "AdminPass123"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{tempfile.gettempdir()}/menu_api_import.db"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.shared.config.settings import get_settings
from app.shared.core.dependencies import get_notifier
from app.shared.events.notifier import RecordingNotifier

API = "/api/v1"
ADMIN_EMAIL = "admin@menu.local"
ADMIN_PASSWORD = "AdminPass123"
PASSWORD = "Secret123!"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(tmp_path, monkeypatch, notifier):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'menu.db'}")
    get_settings.cache_clear()
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture
def signup(client):
    """Register an account and return ``SimpleNamespace(id, token, headers, data)``."""

    def _signup(username: str, email: str = None, name: str = None, phone_number: str = None):
        response = client.post(f"{API}/auth/signup", json={
            "name": name or username.title(),
            "username": username,
            "email": email or f"{username}@example.com",
            "password": PASSWORD,
            "phoneNumber": phone_number,
        })
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return SimpleNamespace(
            id=data["user"]["id"],
            token=data["token"],
            headers=bearer(data["token"]),
            data=data["user"],
        )

    return _signup


@pytest.fixture
def admin(client):
    response = client.post(f"{API}/auth/signin", json={"usernameOrEmail": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    data = response.json()["data"]
    return SimpleNamespace(id=data["user"]["id"], token=data["token"], headers=bearer(data["token"]), data=data["user"])


@pytest.fixture
def user(signup):
    return signup("alice")


@pytest.fixture
def other_user(signup):
    return signup("bob")


# =========================================================================
# CATALOG FACTORIES
# =========================================================================

@pytest.fixture
def make_contact(client):
    def _make(owner, **fields):
        payload = {"name": "Front desk", "username": "frontdesk", "phoneNumber": "+15550000001"}
        payload.update(fields)
        response = client.post(f"{API}/messaging-contacts", json=payload, headers=owner.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def make_business(client, make_contact):
    def _make(owner, name: str = "Corner Cafe", contact_id: str = None, **fields):
        contact_id = contact_id or make_contact(owner)["id"]
        payload = {
            "messagingContactId": contact_id,
            "name": name,
            "description": "Coffee and pastries",
            "location": "Main Street 1",
            "logo": "https://cdn.example.com/logo.png",
            "image": "https://cdn.example.com/cover.png",
        }
        payload.update(fields)
        response = client.post(f"{API}/businesses", json=payload, headers=owner.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def make_category(client):
    def _make(owner, business_id: str, name: str = "Drinks", **fields):
        payload = {"businessId": business_id, "name": name}
        payload.update(fields)
        response = client.post(f"{API}/categories", json=payload, headers=owner.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def make_item(client):
    def _make(owner, category_id: str, name: str = "Espresso", price: float = 10, **fields):
        payload = {
            "categoryId": category_id,
            "name": name,
            "price": price,
            "image": "https://cdn.example.com/item.png",
        }
        payload.update(fields)
        response = client.post(f"{API}/items", json=payload, headers=owner.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def make_plan(client, admin):
    def _make(name: str = "Premium", duration: int = 3, **fields):
        payload = {
            "name": name,
            "price": 29.99,
            "duration": duration,
            "feature": ["Unlimited items", "Priority support"],
            "maxBusiness": 3,
            "maxCategory": 20,
            "maxItem": 500,
            "analysisType": "advanced",
        }
        payload.update(fields)
        response = client.post(f"{API}/subscription-plans", json=payload, headers=admin.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
