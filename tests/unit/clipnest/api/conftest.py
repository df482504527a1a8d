import pytest
from fastapi.testclient import TestClient

from clipnest.api.main import create_app


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    def _register(username: str = "alice", password: str = "correct-horse", **overrides):
        body = {
            "username": username,
            "email": f"{username}@example.com",
            "full_name": username.title(),
            "password": password,
            "avatar": f"https://media.example.com/avatars/{username}.png",
        }
        body.update(overrides)
        return client.post("/api/v1/auth/register", json=body)

    return _register


@pytest.fixture
def login(client, register):
    """Register and log in a user; returns ``(user_json, auth_headers, login_json)``."""

    def _login(username: str = "alice", password: str = "correct-horse"):
        register(username, password)
        response = client.post("/api/v1/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        data = response.json()
        # keep every request explicit about who it acts as
        client.cookies.clear()
        return data["user"], {"Authorization": f"Bearer {data['access_token']}"}, data

    return _login
