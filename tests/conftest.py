"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The application is pointed at a throwaway SQLite database before any `app`
module is imported; every API test starts from freshly created tables with
only the provisioned admin account.
"""

import asyncio
import os
import tempfile
from collections.abc import Callable, Generator

_TEST_DIR = tempfile.mkdtemp(prefix="sales-reports-tests-")

os.environ["REPORTS_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-suite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["INITIAL_ADMIN_USERNAME"] = "admin"
os.environ["INITIAL_ADMIN_PASSWORD"] = "admin-pass"
os.environ["INITIAL_ADMIN_FULL_NAME"] = "Admin User"
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
# No real LLM provider is ever contacted from tests.
os.environ["GEMINI_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["OLLAMA_BASE_URL"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture
def app() -> FastAPI:
    """
    Create a new application instance for each test.
    """
    # Import the factory function here so the environment above is applied first.
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Fixture to get a test client for making API requests.
    The TestClient handles the application's lifespan events (startup/shutdown),
    which create the tables and provision the admin.
    """
    from app.db import reset_db

    asyncio.run(reset_db())
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def fresh_db():
    """Empty tables for tests that talk to the services directly."""
    from app.db import close_db, reset_db

    await reset_db()
    yield
    await close_db()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def login(client: TestClient, username: str, password: str) -> dict:
    response = client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    return bearer(login(client, ADMIN_USERNAME, ADMIN_PASSWORD)["token"])


@pytest.fixture
def make_user(
    client: TestClient, admin_headers: dict[str, str]
) -> Callable[..., tuple[dict, dict[str, str]]]:
    """
    Factory registering a user through the admin API.

    Returns the public user JSON and bearer headers for that user.
    """

    def _make_user(
        username: str, password: str = "pw1", role: str = "User", full_name: str | None = None
    ) -> tuple[dict, dict[str, str]]:
        response = client.post(
            "/api/users/register",
            json={
                "fullName": full_name or username.capitalize(),
                "username": username,
                "password": password,
                "role": role,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        token = login(client, username, password)["token"]
        return response.json(), bearer(token)

    return _make_user


@pytest.fixture
def grant(client: TestClient, admin_headers: dict[str, str]) -> Callable[[str, str], dict]:
    """Factory creating a viewer -> viewee permission edge as admin."""

    def _grant(viewer_id: str, viewee_id: str) -> dict:
        response = client.post(
            "/api/permissions",
            json={"viewerId": viewer_id, "vieweeId": viewee_id},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _grant
