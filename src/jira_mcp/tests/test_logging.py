"""Tests for structured logging and tool call tracking."""

import io

import orjson
import pytest

from jira_mcp.runtime.observability import (
    ToolCall,
    configure_logging,
    get_logger,
    sanitize_arguments,
    summarize_result,
)
from jira_mcp.transform import SimplifiedSearchResult


def _json_lines(stream: io.StringIO) -> list[dict]:
    return [orjson.loads(line) for line in stream.getvalue().splitlines()]


def test_json_renderer_merges_bound_context() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=out)

    get_logger("jira.cache", component="cache").bind(key="jira:fields").debug("cache hit", expired=False)

    [entry] = _json_lines(out)
    assert entry["event"] == "cache hit"
    assert entry["level"] == "debug"
    assert entry["logger"] == "jira.cache"
    assert entry["component"] == "cache"
    assert entry["key"] == "jira:fields"
    assert entry["expired"] is False


def test_level_filters_entries() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="WARNING", output=out)
    log = get_logger("jira.client")

    log.info("api response")
    log.warning("retrying")

    assert [e["event"] for e in _json_lines(out)] == ["retrying"]


def test_loggers_created_before_configuration_follow_it() -> None:
    log = get_logger("early")
    out = io.StringIO()
    configure_logging(format="json", output=out)

    log.info("started")

    assert _json_lines(out)[0]["logger"] == "early"


def test_console_renderer_line() -> None:
    out = io.StringIO()
    configure_logging(format="console", output=out, colors=False)

    get_logger("jira.client").info("api response", status=200, url="https://jira/x")

    line = out.getvalue().rstrip("\n")
    assert "info" in line
    assert "jira.client  api response  status=200 url=https://jira/x" in line
    assert "\033[" not in line


@pytest.mark.parametrize(("kwargs", "message"), [
    ({"format": "xml"}, "Unknown log format"),
    ({"level": "TRACE"}, "Unknown log level"),
])
def test_configure_logging_rejects_unknown_values(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        configure_logging(**kwargs)


def test_sanitize_masks_password() -> None:
    assert sanitize_arguments({"username": "bot", "password": "hunter2"}) == {
        "username": "bot",
        "password": "***",
    }


def test_summarize_result() -> None:
    search = SimplifiedSearchResult(total=3, start_at=0, max_results=50, issues=[])

    assert summarize_result(None) == "null"
    assert summarize_result([1, 2]) == "list(2)"
    assert summarize_result(search) == "0 issues"
    assert summarize_result({"key": "KP-1", "id": "1"}) == "key: KP-1"
    assert summarize_result({"a": 1, "b": 2, "c": 3, "d": 4}) == "{a, b, c...}"


def test_tool_call_logs_start_and_failure() -> None:
    out = io.StringIO()
    configure_logging(format="json", output=out)

    call = ToolCall.start("jira_get_user", {"username": "bot", "password": "hunter2"})
    call.fail(RuntimeError("boom"))

    start, failed = _json_lines(out)
    assert start["tool"] == "jira_get_user"
    assert "hunter2" not in start["input"]
    assert failed["event"] == "tool failed"
    assert failed["error"] == "boom"
    assert failed["duration_ms"] >= 0
