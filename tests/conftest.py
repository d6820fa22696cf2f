# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from qa_service.config import Settings
from qa_service.database import create_engine_from_settings, create_sessionmaker, drop_db, init_db
from qa_service.main import create_app
from qa_service.models import User, make_category


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret",
        access_token_expire_minutes=5,
    )


@pytest.fixture
def client(settings):
    """TestClient whose startup hook creates the tables in a fresh database."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    """Register a user and return ``(user_id, auth_headers)``."""

    def _register(username, email=None, password="password123"):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def category_id(client, register):
    _, headers = register("curator")
    response = client.post(
        "/api/categories",
        json={"name": "Python", "description": "Python programming"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


@pytest.fixture
def ask(client, category_id):
    """Create a question as the given user and return its JSON."""

    def _ask(headers, title="How do generators work?", body="Looking for a short explanation.", **extra):
        payload = {"title": title, "body": body, "category": category_id}
        payload.update(extra)
        response = client.post("/api/questions", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _ask


@pytest.fixture
def answer(client):
    def _answer(question_id, headers, body="Use yield inside a function."):
        response = client.post(f"/api/questions/{question_id}/answers", json={"body": body}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _answer


# --- direct database access for service-level tests ------------------------

@pytest.fixture
async def session(settings):
    engine = create_engine_from_settings(settings)
    await init_db(engine)
    async with create_sessionmaker(engine)() as s:
        yield s
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
async def seeded(session):
    """Two users and one category, committed."""
    alice = User(username="alice", email="alice@example.com", hashed_password="x")
    bob = User(username="bob", email="bob@example.com", hashed_password="x")
    category = make_category("General", "Anything goes")
    session.add_all([alice, bob, category])
    await session.commit()
    return alice, bob, category
