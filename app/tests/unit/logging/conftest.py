"""Fixtures for route_polyglot.logging tests."""

import pytest
import structlog
from unittest.mock import Mock

from route_polyglot.configuration import Settings


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False
    return settings


@pytest.fixture(autouse=True)
def clean_log_context():
    """Start and end every test with an empty context."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
