"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from ratify.config import Settings
from ratify.main import create_app

ADMIN_CODE = "club-admin"
PINS = {"Alice": "1111", "Bob": "2222", "Carol": "3333"}


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "ratify.json"


@pytest.fixture
def settings(data_file):
    return Settings(
        data_file=str(data_file),
        seed_members=",".join(f"{name}:{pin}" for name, pin in PINS.items()),
        admin_code=ADMIN_CODE,
        pin_hash_iterations=1000,
        max_pin_failures=3,
        lockout_minutes=15,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _login(client, name, admin=False):
    body = {"name": name, "pin": PINS[name]}
    if admin:
        body["code"] = ADMIN_CODE
    resp = client.post("/api/auth", json=body)
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def login(client):
    """Log a seeded member in and return auth headers"""
    def _do(name="Alice", admin=False):
        return _login(client, name, admin)
    return _do


@pytest.fixture
def candidate(client, login):
    """A freshly added candidate"""
    resp = client.post(
        "/api/candidates",
        json={"firstName": "Kim", "lastInitial": "p", "notes": "guest of Bob"},
        headers=login("Bob"),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
