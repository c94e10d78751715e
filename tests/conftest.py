"""Shared fixtures."""

import pytest

from jobdesc.logging.context import clear_log_context


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Provide a predictable environment for configuration loading."""
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()
