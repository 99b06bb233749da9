"""
Global test fixtures for the Staff Accounts API.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Account payload factories
- FastAPI test clients wired to the mock database
- Session token helpers
"""

import sys
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_accounts_db(mock_async_mongo_client):
    """Provide mock accounts_db database with the app's indexes."""
    from app.database.databases import accounts_db
    from app.database.registry import create_indexes

    await create_indexes(mock_async_mongo_client)
    yield mock_async_mongo_client[accounts_db.DB_NAME]


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest.fixture
def staff_payload() -> dict:
    """Registration body for a Staff account."""
    return {
        "username": "alice",
        "email": "a@x.com",
        "password": "p1",
        "role": "Staff",
        "phone": "1234567890",
        "city": "X",
        "country": "Y",
    }


@pytest.fixture
def other_staff_payload() -> dict:
    """Registration body for a second Staff account."""
    return {
        "username": "bob",
        "email": "bob@example.com",
        "password": "BobPassword1",
        "role": "Staff",
        "phone": "5555555555",
        "city": "Lyon",
        "country": "France",
    }


@pytest.fixture
def admin_payload() -> dict:
    """Registration body for an Admin account."""
    return {
        "username": "root",
        "email": "Admin@Example.com",
        "password": "AdminPassword123!",
        "role": "Admin",
        "phone": "0987654321",
        "city": "Paris",
        "country": "France",
    }


# =============================================================================
# Token Helpers
# =============================================================================

@pytest.fixture
def make_token():
    """
    Factory issuing session tokens the same way login does.

    Usage:
        token = make_token(user_id, "Admin")
        expired = make_token(user_id, "Staff", expires_delta=timedelta(seconds=-1))
    """
    from app.core.security import create_access_token

    def _make(user_id: str, role: str, **kwargs) -> str:
        return create_access_token(user_id=user_id, role=role, **kwargs)
    return _make


@pytest.fixture
def use_session():
    """Helper replacing whatever session a TestClient holds with a token."""
    from app.config import get_settings

    def _use(client: TestClient, token: str) -> TestClient:
        client.cookies.clear()
        client.cookies.set(get_settings().session_cookie_name, token)
        return client
    return _use


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_async_mongo_client):
    """
    Create FastAPI app for testing.

    Account services are bound to the mock database and the startup hook
    talks to the mock client instead of a real MongoDB.
    """
    from app.database.databases import accounts_db
    from app.main import app as fastapi_app
    from app.routers.users import get_auth_service, get_user_service
    from app.services.auth_service import AuthService
    from app.services.user_service import UserService

    db = mock_async_mongo_client[accounts_db.DB_NAME]
    fastapi_app.dependency_overrides[get_auth_service] = lambda: AuthService(db)
    fastapi_app.dependency_overrides[get_user_service] = lambda: UserService(db)

    async def get_mock_client():
        return mock_async_mongo_client

    with patch("app.main.get_mongo_client", side_effect=get_mock_client):
        yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_prefix() -> str:
    from app.config import get_settings
    return get_settings().api_prefix
