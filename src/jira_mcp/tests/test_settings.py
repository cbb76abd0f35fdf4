"""Tests for environment-based settings."""

import pytest

from jira_mcp.formats import ResponseFormat
from jira_mcp.foundation.config import get_settings, load_settings
from jira_mcp.foundation.errors import ConfigurationError, ErrorCode

from .support import make_settings


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Minimal valid environment."""
    for name in ("JIRA_PROJECTS_FILTER", "JIRA_RESPONSE_FORMAT", "JIRA_SSL_VERIFY", "JIRA_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com/")
    monkeypatch.setenv("JIRA_USERNAME", "bot")
    monkeypatch.setenv("JIRA_PASSWORD", "secret")
    return monkeypatch


def test_defaults(env: pytest.MonkeyPatch) -> None:
    s = load_settings(_env_file=None)
    assert s.base_url == "https://jira.example.com"
    assert s.projects_filter == ()
    assert s.response_format is ResponseFormat.JSON
    assert s.timeout == 30_000
    assert s.retry_count == 3
    assert s.retry_delay == 1_000
    assert s.ssl_verify is True
    assert s.cache_ttl == 300.0
    assert s.timeout_seconds == 30.0
    assert s.rest_api_url == "https://jira.example.com/rest/api/2"
    assert s.agile_api_url == "https://jira.example.com/rest/agile/1.0"


def test_password_is_secret(env: pytest.MonkeyPatch) -> None:
    s = load_settings(_env_file=None)
    assert "secret" not in repr(s)
    assert s.password.get_secret_value() == "secret"


@pytest.mark.parametrize("missing", ["JIRA_BASE_URL", "JIRA_USERNAME", "JIRA_PASSWORD"])
def test_missing_required_variable(env: pytest.MonkeyPatch, missing: str) -> None:
    env.delenv(missing)
    with pytest.raises(ConfigurationError) as exc:
        load_settings(_env_file=None)
    assert exc.value.message == f"Missing {missing} environment variable"
    assert exc.value.variable == missing
    assert exc.value.code is ErrorCode.CONFIGURATION


def test_first_missing_variable_is_reported(env: pytest.MonkeyPatch) -> None:
    env.delenv("JIRA_USERNAME")
    env.delenv("JIRA_PASSWORD")
    with pytest.raises(ConfigurationError, match="JIRA_USERNAME"):
        load_settings(_env_file=None)


def test_invalid_number_is_configuration_error(env: pytest.MonkeyPatch) -> None:
    env.setenv("JIRA_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError) as exc:
        load_settings(_env_file=None)
    assert exc.value.variable == "JIRA_TIMEOUT"
    assert exc.value.message.startswith("Invalid JIRA_TIMEOUT")


def test_retry_count_has_no_upper_bound(env: pytest.MonkeyPatch) -> None:
    env.setenv("JIRA_RETRY_COUNT", "12")
    s = load_settings(_env_file=None)
    assert s.retry_count == 12


def test_negative_retry_count_is_rejected(env: pytest.MonkeyPatch) -> None:
    env.setenv("JIRA_RETRY_COUNT", "-1")
    with pytest.raises(ConfigurationError) as exc:
        load_settings(_env_file=None)
    assert exc.value.variable == "JIRA_RETRY_COUNT"


def test_projects_filter_parsing(env: pytest.MonkeyPatch) -> None:
    env.setenv("JIRA_PROJECTS_FILTER", " kp, ops,, Web ,")
    s = load_settings(_env_file=None)
    assert s.projects_filter == ("KP", "OPS", "WEB")


def test_is_project_allowed() -> None:
    unfiltered = make_settings()
    assert unfiltered.is_project_allowed("ANY")

    filtered = make_settings(projects_filter="KP,OPS")
    assert filtered.is_project_allowed("KP")
    assert filtered.is_project_allowed("kp")
    assert not filtered.is_project_allowed("WEB")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("toon", ResponseFormat.TOON),
        ("TOON", ResponseFormat.TOON),
        (" Toon ", ResponseFormat.TOON),
        ("json", ResponseFormat.JSON),
        ("yaml", ResponseFormat.JSON),
        ("", ResponseFormat.JSON),
    ],
)
def test_response_format_token(env: pytest.MonkeyPatch, raw: str, expected: ResponseFormat) -> None:
    env.setenv("JIRA_RESPONSE_FORMAT", raw)
    assert load_settings(_env_file=None).response_format is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("false", False), ("FALSE", False), ("0", False), ("true", True), ("no", True), ("1", True)],
)
def test_ssl_verify_flag(env: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    env.setenv("JIRA_SSL_VERIFY", raw)
    assert load_settings(_env_file=None).ssl_verify is expected


def test_get_settings_is_memoized(env: pytest.MonkeyPatch) -> None:
    first = get_settings()
    env.setenv("JIRA_USERNAME", "someone-else")
    assert get_settings() is first
