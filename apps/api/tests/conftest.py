"""
Global pytest configuration and fixtures for the AssetDesk API test suite.
"""

import os
from typing import Any, Callable, Dict, Generator

# Set test environment variables before settings are loaded
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.main import app  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.permission_fixtures import *  # noqa: F403, F401, E402


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def valid_jwt_payload() -> Dict[str, Any]:
    """Valid access token payload for testing."""
    return {
        "sub": "user-123",
        "email": "test@example.com",
        "role": "MEMBER",
        "organization_id": "org-123",
    }


@pytest.fixture
def make_token(test_jwt_secret: str) -> Callable[..., str]:
    """Factory for signed access tokens; keyword arguments override claims."""

    def _make_token(**claims: Any) -> str:
        payload = {
            "sub": "user-123",
            "email": "test@example.com",
            "role": "MEMBER",
            "organization_id": "org-123",
        }
        payload.update(claims)
        payload = {key: value for key, value in payload.items() if value is not None}
        return jwt.encode(payload, test_jwt_secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., Dict[str, str]]:
    """Factory for Authorization headers carrying a signed token."""

    def _auth_headers(**claims: Any) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(**claims)}"}

    return _auth_headers


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
