"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for exercising the
account routes end to end against the mock database.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Account Route Helpers
# =============================================================================

@pytest.fixture
def register(client, api_prefix):
    """
    Register an account through the API and return the created record.

    Usage:
        alice = register(staff_payload)
    """
    def _register(payload: dict) -> dict:
        response = client.post(f"{api_prefix}/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _register


@pytest.fixture
def login(client, api_prefix):
    """Log in through the API and return the raw response."""
    def _login(identifier: str, password: str):
        return client.post(
            f"{api_prefix}/login",
            json={"identifier": identifier, "password": password},
        )
    return _login


@pytest.fixture
def accounts(register, staff_payload, other_staff_payload, admin_payload) -> dict:
    """Register two Staff accounts and one Admin; keyed by username."""
    created = {}
    for payload in (staff_payload, other_staff_payload, admin_payload):
        user = register(payload)
        created[user["username"]] = user
    return created


@pytest.fixture
def admin_client(client, accounts, make_token, use_session):
    """TestClient holding an Admin session."""
    return use_session(client, make_token(accounts["root"]["id"], "Admin"))


@pytest.fixture
def staff_client(client, accounts, make_token, use_session):
    """TestClient holding alice's Staff session."""
    return use_session(client, make_token(accounts["alice"]["id"], "Staff"))


# =============================================================================
# Auth Service Fixtures
# =============================================================================

@pytest.fixture
def mock_auth_service():
    """
    Create a fully mocked AuthService.

    All methods are AsyncMock, allowing you to configure return values:

        mock_auth_service.login.side_effect = RuntimeError("boom")
    """
    service = MagicMock()
    service.register_user = AsyncMock()
    service.login = AsyncMock()
    service.authenticate = AsyncMock()
    return service


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error envelope structure."""
    def _assert(response, status_code: int, kind: str, message_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert data["success"] is False
        assert data["status_code"] == status_code
        assert data["error"] == kind
        assert data["data"] is None
        if message_contains:
            assert message_contains.lower() in data["message"].lower()
    return _assert


@pytest.fixture
def assert_no_password():
    """Helper asserting no password material appears in a payload."""
    def _assert(payload):
        text = repr(payload).lower()
        assert "password" not in text
        assert "$2b$" not in text
    return _assert
