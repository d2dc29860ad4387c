# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import autoimporter.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL (test)
        before each test for isolation.

    The app logger is a module-level singleton; config resolution and the CLI
    change its level as a side effect, so every test starts from TEST again.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test


@pytest.fixture(autouse=True)
def clean_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's LOG_LEVEL / WATCH_INTERVAL out of resolution tests."""
    for name in (
        "AUTOIMPORTER_LOG_LEVEL",
        "LOG_LEVEL",
        "AUTOIMPORTER_WATCH_INTERVAL",
        "WATCH_INTERVAL",
    ):
        monkeypatch.delenv(name, raising=False)
