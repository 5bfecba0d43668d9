"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from server.config import Settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test")


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(gemini_api_key="your-api-key-here")


@pytest.fixture
def generator() -> AsyncMock:
    """Stub model: generate_content() returns a fixed answer."""
    stub = AsyncMock()
    stub.generate_content.return_value = "Pay rent every month."
    return stub
