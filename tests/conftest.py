"""
Pytest configuration and fixtures for the mock flag API tests
"""

import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def flag_store():
    """Fresh, empty flag store"""
    from mockflags.feature_flags.store import FlagStore
    return FlagStore()


@pytest.fixture
def test_settings():
    from mockflags.config import Settings
    return Settings()


@pytest.fixture
def app(test_settings, flag_store):
    """FastAPI app bound to the per-test store"""
    from mockflags.main import create_app
    return create_app(test_settings, flag_store)


@pytest.fixture
def client(app):
    """Test client for FastAPI app"""
    return TestClient(app)


@pytest.fixture
async def async_client(app):
    """Async test client for FastAPI app"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_flag():
    """Boolean flag payload shaped like a LaunchDarkly create request"""
    return {
        "key": "new-checkout",
        "name": "New Checkout",
        "description": "Route traffic to the new checkout flow",
        "kind": "boolean",
        "variations": [
            {"value": True, "name": "True"},
            {"value": False, "name": "False"}
        ],
        "defaults": {"onVariation": 1, "offVariation": 0}
    }
