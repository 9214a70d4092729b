"""
Shared test configuration and fixtures.

Provides Sentry and environment isolation used across the syntax, lexicon and
configuration tests.
"""

import logging
from unittest.mock import patch

import pytest

SETTINGS_ENV_VARS = (
    "DEBUG",
    "LOGGING_CONFIG_FILE",
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "ENVIRONMENT",
)


@pytest.fixture
def capture_exception():
    """Replace Sentry exception capture with a mock."""
    with patch("sentry_sdk.capture_exception") as mock_capture:
        yield mock_capture


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any settings environment variables inherited from the shell."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def root_logger():
    """Restore the root logger level and handlers after the test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield root
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)


@pytest.fixture
def explode():
    """A validator stand-in that fails with something other than a syntax error."""

    def ensure(value: str) -> None:
        raise RuntimeError(f"boom: {value}")

    return ensure
