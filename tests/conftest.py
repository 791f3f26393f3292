"""Shared pytest configuration."""

import pytest

from src.log_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep per-node debug logging out of large graph tests."""
    configure_logging(level="WARNING", json_logs=True)
