"""Pytest configuration and fixtures."""

import os
import time
from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock, patch

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from fastapi.testclient import TestClient
from jwt.algorithms import ECAlgorithm

# Signing key shared by the whole test session
TEST_PRIVATE_KEY = ec.generate_private_key(ec.SECP256R1())
TEST_JWK = ECAlgorithm.to_jwk(TEST_PRIVATE_KEY.public_key())

TEST_USER_ID = "550e8400-e29b-41d4-a716-446655440000"

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ["SUPABASE_SIGNING_KEY_JWK"] = TEST_JWK


def create_test_token(
    sub: str = TEST_USER_ID,
    email: str | None = "test@example.com",
    role: str | None = "authenticated",
    exp_offset: int = 3600,
    aud: str = "authenticated",
    key: Any = TEST_PRIVATE_KEY,
) -> str:
    """Create a Supabase-style ES256 session token.

    Args:
        sub: Subject (user ID).
        email: User email.
        role: User role.
        exp_offset: Seconds from now for expiration (negative for expired).
        aud: Audience claim.
        key: EC private key used to sign.

    Returns:
        str: Encoded JWT token.
    """
    now = int(time.time())
    payload = {
        "sub": sub,
        "email": email,
        "role": role,
        "exp": now + exp_offset,
        "iat": now,
        "aud": aud,
        "iss": "https://test-project.supabase.co/auth/v1",
    }
    return jwt.encode(payload, key, algorithm="ES256")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Provide the token factory to tests."""
    return create_test_token


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings and signing key around every test."""
    from src.api.middleware.auth import get_signing_key
    from src.core.config import get_settings

    get_settings.cache_clear()
    get_signing_key.cache_clear()
    yield
    get_settings.cache_clear()
    get_signing_key.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked scoped Supabase client for request handlers.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    with patch("src.api.deps.create_scoped_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def mock_admin_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked admin Supabase client for health checks."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with patch("src.core.supabase.get_supabase_admin_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def client(
    mock_supabase_client: MagicMock, mock_admin_client: MagicMock
) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client
