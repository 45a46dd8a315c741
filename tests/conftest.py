"""
Shared pytest fixtures for Publana tests.

This module provides common fixtures including:
- Redis mocks for option store tests
- In-memory stores and content host
- FastAPI test client wired to in-memory backends
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from publana.config.provider import (
    APIConfig,
    AuthConfig,
    ContentHostConfig,
    StorageConfig,
)
from publana.main import create_app
from publana.modules.posts import InMemoryContentHost
from publana.modules.storage import MemoryOptionStore
from publana.modules.tokens import TokenStore

VALID_TOKEN = "a" * 64
ADMIN_KEY = "admin-key-123"


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock()
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    redis.pipeline = MagicMock(return_value=AsyncMock())
    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    This allows testing code that reads back what it writes.
    """
    storage = {}

    redis = AsyncMock()

    async def mock_set(key, value, *args, **kwargs):
        storage[key] = value
        return True

    async def mock_get(key):
        return storage.get(key)

    redis.set = mock_set
    redis.get = mock_get
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    redis._storage = storage  # Expose for test assertions

    return redis


# =============================================================================
# Stores
# =============================================================================

class InterleavingOptionStore(MemoryOptionStore):
    """Memory store that yields to the event loop between read and return."""

    async def get(self, key, default=None):
        value = await super().get(key, default)
        await asyncio.sleep(0)
        return value


@pytest.fixture
def option_store():
    return MemoryOptionStore()


@pytest.fixture
def token_store(option_store):
    return TokenStore(option_store)


# =============================================================================
# Application
# =============================================================================

class StaticConfigProvider:
    """Config provider returning fixed test configuration."""

    def __init__(self, admin_api_keys=None, timeout=5.0):
        self.admin_api_keys = [ADMIN_KEY] if admin_api_keys is None else admin_api_keys
        self.timeout = timeout

    def get_api_config(self):
        return APIConfig(
            port=8080,
            host="127.0.0.1",
            namespace="/publana/v1",
            log_level="INFO",
            debug=False,
            brand_name="Publana",
        )

    def get_storage_config(self):
        return StorageConfig(
            backend="memory",
            redis_host="localhost",
            redis_port=6379,
            redis_db=0,
            redis_password=None,
            token_option_key="publana_api_tokens",
        )

    def get_auth_config(self):
        return AuthConfig(admin_api_keys=self.admin_api_keys)

    def get_content_host_config(self):
        return ContentHostConfig(kind="memory", timeout=self.timeout, site_url="https://blog.test")


@pytest.fixture
def content_host():
    return InMemoryContentHost(site_url="https://blog.test")


@pytest.fixture
def app_option_store():
    """Option store pre-seeded with one valid token."""
    return MemoryOptionStore({"publana_api_tokens": [VALID_TOKEN]})


@pytest.fixture
def app(app_option_store, content_host):
    return create_app(
        config_provider=StaticConfigProvider(),
        option_store=app_option_store,
        content_host=content_host,
        setup_logging=False,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def admin_headers():
    return {"X-API-Key": ADMIN_KEY}


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
