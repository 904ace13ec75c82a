#!/usr/bin/env python3
"""
Shared fixtures: an in-memory SQLite database, the app wired to it and an
httpx client talking to the app over ASGI.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dental_api.core.config import Settings
from dental_api.crud.content import ensure_about
from dental_api.db.session import Database
from dental_api.main import create_app

# Test database configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
ADMIN_PASSWORD = "admin-pass"


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Pure unit tests with no database")
    config.addinivalue_line("markers", "integration: Tests that run the app against an in-memory database")
    config.addinivalue_line("markers", "smoke: Quick validation tests")


@pytest.fixture
def settings():
    """Settings isolated from any local .env file"""
    return Settings(
        _env_file=None,
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET="test-secret",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        APP_ENV="testing",
        LOG_REQUESTS=False,
    )


@pytest_asyncio.fixture
async def database(settings):
    """Fresh schema per test; the ASGI transport skips lifespan so tables are created here"""
    db = Database(settings.async_db_uri)
    await db.create_all()
    async with db.session() as session:
        await ensure_about(session)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def admin_headers(client):
    """Bearer header for a logged-in admin console"""
    response = await client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.fixture
def make_user(client):
    """Factory: create an account and return its bearer header"""

    async def _make(username="Kim", email="kim@example.com", password="pw-1234"):
        response = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _make


@pytest_asyncio.fixture
async def user_headers(make_user):
    return await make_user()


@pytest.fixture
def reservation_payload():
    """Sample booking"""
    return {
        "patientName": "Jane Doe",
        "phoneNumber": "555-0100",
        "desiredDate": "2025-07-01",
        "desiredTime": "09:00",
        "notes": "first visit",
    }
