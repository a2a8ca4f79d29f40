"""Integration test fixtures."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(autouse=True)
def mock_env():
    """Set environment variables for integration tests."""
    with patch.dict(
        os.environ,
        {
            "DEBUG": "true",
            "ENVIRONMENT": "development",
            "RATE_LIMIT_ENABLED": "false",
        },
    ):
        from sql_quest.core.config import get_settings

        get_settings.cache_clear()
        yield
        get_settings.cache_clear()


@pytest.fixture
def client(mock_env):
    """Test client with application startup and shutdown run."""
    from sql_quest.api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
