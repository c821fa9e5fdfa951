"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from jobboard.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"

AIRTABLE_ENV_VARS = (
    "AIRTABLE_ACCESS_TOKEN",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_TABLE_NAME",
    "AIRTABLE_ENDPOINT_URL",
    "LOG_LEVEL",
)


@pytest.fixture
def fixtures_dir():
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the environment loader reads."""
    for name in AIRTABLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_env_vars(clean_env):
    """Set valid Airtable credentials in the environment."""
    clean_env.setenv("AIRTABLE_ACCESS_TOKEN", "patTestToken123")
    clean_env.setenv("AIRTABLE_BASE_ID", "appTestBase123")
    clean_env.setenv("AIRTABLE_TABLE_NAME", "Jobs")
    return clean_env


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()
