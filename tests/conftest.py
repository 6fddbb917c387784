# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase-backed gateway/store for in-memory fakes
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test.anon.key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test.service.key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeIdentityGateway, FakeProfileStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def identity():
    """In-memory identity provider."""
    return FakeIdentityGateway()


@pytest.fixture
def store():
    """In-memory profile/tracking store."""
    return FakeProfileStore()


@pytest.fixture
def client(identity, store):
    """
    TestClient with the fakes injected.

    Not used as a context manager, so the lifespan (which connects to
    Supabase) never runs.
    """
    from app.dependencies import get_identity_gateway, get_profile_store
    from app.main import app

    app.dependency_overrides[get_identity_gateway] = lambda: identity
    app.dependency_overrides[get_profile_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_id(identity):
    """A registered user."""
    return identity.add_user("student@example.com", "secret123", "Sam Student")


@pytest.fixture
def auth_headers(identity, user_id):
    """Authorization header for `user_id`."""
    return {"Authorization": f"Bearer {identity.issue_token(user_id)}"}


@pytest.fixture
def signup_payload():
    """Valid signup body."""
    return {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "password": "secret123",
    }
