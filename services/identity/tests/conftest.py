"""
Pytest fixtures for identity service tests.

Structured logs are routed through stdlib logging so they never land
on the stdout that CLI tests capture.
"""

import pytest

from services.identity.log_config import configure_logging
from services.identity.settings import get_settings


@pytest.fixture(autouse=True)
def structured_logging():
    """Configure structlog for each test with fresh settings."""
    get_settings.cache_clear()
    configure_logging(log_level="DEBUG", log_format="json")
    yield
    get_settings.cache_clear()
