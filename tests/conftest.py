"""
Shared fixtures for the test suite.

Every test gets its own SQLite database file (through aiosqlite) so no
external PostgreSQL server is needed and tests cannot see each other's rows.
"""

from collections.abc import AsyncGenerator, Generator
from datetime import timedelta

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from postboard.config import Settings
from postboard.db import close_db, create_app_engine, create_session_factory, init_db
from postboard.db_handlers import UserDBHandler
from postboard.services.auth_service import AuthService

TEST_SECRET = "test-secret"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'postboard_test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """
    Create a new application instance bound to the per-test database.
    """
    # Import the factory function here to ensure it's fresh for each test.
    from main import create_app

    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client running inside the application's lifespan (startup/shutdown).
    """
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session_factory(
    test_settings: Settings,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over an initialized schema, for handler-level tests."""
    engine = create_app_engine(test_settings)
    await init_db(engine)
    yield create_session_factory(engine)
    await close_db(engine)


@pytest.fixture
def auth_service(test_settings: Settings) -> AuthService:
    return AuthService(
        UserDBHandler(),
        secret_key=test_settings.jwt_secret,
        algorithm=test_settings.jwt_algorithm,
        token_ttl=timedelta(minutes=test_settings.access_token_expire_minutes),
        bcrypt_rounds=test_settings.bcrypt_rounds,
    )


@pytest.fixture
def register_user(client: TestClient):
    """Register through the API and return the decoded JSON body."""

    def _register(name: str, email: str, password: str, **extra) -> dict:
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, **extra},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register
