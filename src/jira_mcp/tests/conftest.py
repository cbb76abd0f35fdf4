"""Shared fixtures."""

from __future__ import annotations

import pytest

from jira_mcp.foundation.config import JiraSettings, clear_settings_cache
from jira_mcp.runtime.observability import configure_logging

from .support import FakeClock, RecordingSleep, make_settings


@pytest.fixture(autouse=True)
def quiet_logs() -> object:
    """Silence structured logging and drop memoized settings between tests."""
    configure_logging(format="none")
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> JiraSettings:
    return make_settings()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
