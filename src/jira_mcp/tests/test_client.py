"""Tests for the resilient Jira client over httpx.MockTransport."""

import base64

import httpx
import orjson
import pytest

from jira_mcp.client import AGILE_API, REST_API, BasicAuth, build_query, parse_error_response
from jira_mcp.foundation.errors import (
    AuthenticationError,
    ErrorCode,
    ForbiddenError,
    JiraApiError,
    NotFoundError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ServerUnavailableError,
    TransportError,
)

from .support import RecordingSleep, json_response, make_client


# ─────────────────────────────────────────────────────────────────────────────
# Retry behaviour
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_retries_transient_statuses_then_succeeds(sleep: RecordingSleep) -> None:
    client, transport = make_client(
        [json_response(503), json_response(503), json_response(200, {"key": "KP-1"})],
        sleep,
        retry_count=3,
    )
    async with client:
        assert await client.get("/issue/KP-1") == {"key": "KP-1"}

    assert transport.calls == 3
    assert len(sleep.delays) == 2
    # retry_delay=100ms: attempt n waits within [0.1*2^n, 0.1*2^n + 0.1]
    assert 0.1 <= sleep.delays[0] <= 0.2
    assert 0.2 <= sleep.delays[1] <= 0.3


@pytest.mark.asyncio
async def test_authentication_failure_is_not_retried(sleep: RecordingSleep) -> None:
    client, transport = make_client([json_response(401), json_response(200, {})], sleep)

    with pytest.raises(AuthenticationError) as exc:
        await client.get("/myself")

    assert transport.calls == 1
    assert sleep.delays == []
    assert exc.value.status == 401
    assert exc.value.code is ErrorCode.AUTHENTICATION_FAILED
    assert "JIRA_USERNAME" in exc.value.message


@pytest.mark.asyncio
async def test_not_found_carries_parsed_text(sleep: RecordingSleep) -> None:
    body = {"errorMessages": ["Issue does not exist or you do not have permission to see it."]}
    client, transport = make_client([json_response(404, body)], sleep)

    with pytest.raises(NotFoundError) as exc:
        await client.get("/issue/KP-404")

    assert transport.calls == 1
    assert exc.value.message == (
        "Resource not found: Issue does not exist or you do not have permission to see it."
    )
    assert exc.value.details is not None
    assert exc.value.details.error_messages == body["errorMessages"]


@pytest.mark.asyncio
async def test_forbidden_mentions_captcha(sleep: RecordingSleep) -> None:
    client, _ = make_client([httpx.Response(403, text="<html>denied</html>")], sleep)

    with pytest.raises(ForbiddenError, match="CAPTCHA"):
        await client.get("/issue/KP-1")


@pytest.mark.asyncio
async def test_rate_limit_exhausts_retries(sleep: RecordingSleep) -> None:
    client, transport = make_client([json_response(429) for _ in range(3)], sleep, retry_count=2)

    with pytest.raises(RateLimitError) as exc:
        await client.get("/search")

    assert transport.calls == 3
    assert len(sleep.delays) == 2
    assert exc.value.recoverable


@pytest.mark.asyncio
async def test_generic_error_joins_messages_and_field_errors(sleep: RecordingSleep) -> None:
    body = {"errorMessages": ["Bad request"], "errors": {"summary": "Summary is required"}}
    client, _ = make_client([json_response(400, body)], sleep)

    with pytest.raises(JiraApiError) as exc:
        await client.post("/issue", {"fields": {}})

    assert type(exc.value) is JiraApiError
    assert exc.value.status == 400
    assert exc.value.message == "Jira API error (400): Bad request; summary: Summary is required"


@pytest.mark.asyncio
async def test_server_error_500_is_not_retried(sleep: RecordingSleep) -> None:
    client, transport = make_client([httpx.Response(500, text="Internal")], sleep)

    with pytest.raises(JiraApiError, match=r"\(500\): Internal"):
        await client.get("/serverInfo")

    assert transport.calls == 1


@pytest.mark.asyncio
async def test_agile_errors_use_agile_message(sleep: RecordingSleep) -> None:
    client, _ = make_client([httpx.Response(400, text="board missing")], sleep)

    with pytest.raises(JiraApiError) as exc:
        await client.agile_get("/board/9")

    assert exc.value.message == "Jira Agile API error (400): board missing"


@pytest.mark.asyncio
async def test_agile_404_keeps_generic_message(sleep: RecordingSleep) -> None:
    client, _ = make_client([httpx.Response(404, text="nope")], sleep)

    with pytest.raises(NotFoundError) as exc:
        await client.agile_get("/sprint/1")

    assert exc.value.code is ErrorCode.NOT_FOUND
    assert exc.value.message == "Jira Agile API error (404): nope"


@pytest.mark.asyncio
async def test_agile_403_is_forbidden(sleep: RecordingSleep) -> None:
    client, transport = make_client([httpx.Response(403, text="denied")], sleep)

    with pytest.raises(ForbiddenError) as exc:
        await client.agile_get("/board/9")

    assert exc.value.code is ErrorCode.FORBIDDEN
    assert exc.value.message == "Jira Agile API error (403): denied"
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_agile_unavailable_is_retried(sleep: RecordingSleep) -> None:
    client, transport = make_client(
        [httpx.Response(502), json_response(200, {"values": []})], sleep
    )

    assert await client.agile_get("/board") == {"values": []}
    assert transport.calls == 2
    assert transport.requests[0].url.path == "/rest/agile/1.0/board"


# ─────────────────────────────────────────────────────────────────────────────
# Transport failures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_connection_errors_are_retried(sleep: RecordingSleep) -> None:
    client, transport = make_client(
        [httpx.ConnectError("refused"), json_response(200, {"ok": True})], sleep
    )

    assert await client.get("/myself") == {"ok": True}
    assert transport.calls == 2
    assert len(sleep.delays) == 1


@pytest.mark.asyncio
async def test_connection_errors_surface_after_exhaustion(sleep: RecordingSleep) -> None:
    client, _ = make_client([httpx.ConnectError("refused")] * 2, sleep, retry_count=1)

    with pytest.raises(TransportError, match="refused") as exc:
        await client.get("/myself")

    assert exc.value.code is ErrorCode.NETWORK_ERROR


@pytest.mark.asyncio
async def test_timeouts_are_retried(sleep: RecordingSleep) -> None:
    client, transport = make_client(
        [httpx.ReadTimeout("slow"), httpx.ReadTimeout("slow")], sleep, retry_count=1
    )

    with pytest.raises(RequestTimeoutError) as exc:
        await client.get("/search")

    assert transport.calls == 2
    assert exc.value.code is ErrorCode.TIMEOUT


# ─────────────────────────────────────────────────────────────────────────────
# Request and response shape
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_request_shape(sleep: RecordingSleep) -> None:
    client, transport = make_client([json_response(201, {"id": "10001"})], sleep)

    await client.post("/issue", {"fields": {"summary": "Hi"}}, params={"updateHistory": True})

    request = transport.requests[0]
    expected = base64.b64encode(b"bot:secret").decode()
    assert request.method == "POST"
    assert str(request.url) == "https://jira.example.com/rest/api/2/issue?updateHistory=true"
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    assert orjson.loads(request.content) == {"fields": {"summary": "Hi"}}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(204),
        httpx.Response(200, headers={"content-length": "0"}),
        httpx.Response(200, content=b""),
    ],
)
async def test_empty_responses_return_none(sleep: RecordingSleep, response: httpx.Response) -> None:
    client, _ = make_client([response], sleep)
    assert await client.delete("/issue/KP-1") is None


@pytest.mark.asyncio
async def test_invalid_json_is_parse_error(sleep: RecordingSleep) -> None:
    client, transport = make_client([httpx.Response(200, content=b"<html>login</html>")], sleep)

    with pytest.raises(ParseError):
        await client.get("/myself")
    assert transport.calls == 1


def test_build_query() -> None:
    assert build_query({
        "jql": "project = KP",
        "startAt": 0,
        "validate": False,
        "fields": ["summary", "status"],
        "expand": None,
        "empty": "",
        "none": [],
    }) == {
        "jql": "project = KP",
        "startAt": "0",
        "validate": "false",
        "fields": "summary,status",
    }


def test_parse_error_response_fallbacks() -> None:
    assert parse_error_response(httpx.Response(418)) == ("HTTP 418", None)
    assert parse_error_response(httpx.Response(500, text="oops")) == ("oops", None)
    broken = httpx.Response(500, content=b"{", headers={"content-type": "application/json"})
    assert parse_error_response(broken) == ("HTTP 500", None)
    empty = json_response(400, {"errorMessages": [], "errors": {}})
    text, details = parse_error_response(empty)
    assert text == "HTTP 400"
    assert details is not None


def test_null_error_messages_keep_field_errors() -> None:
    response = json_response(400, {"errorMessages": None, "errors": {"summary": "required"}})
    text, details = parse_error_response(response)
    assert text == "summary: required"
    assert details is not None and details.error_messages == []

    response = json_response(400, {"errorMessages": ["Bad request"], "errors": None})
    assert parse_error_response(response)[0] == "Bad request"


def test_family_classification() -> None:
    assert isinstance(REST_API.classify(503, "down"), ServerUnavailableError)
    assert REST_API.classify(503, "down").message == "Jira API error (503): down"
    assert isinstance(AGILE_API.classify(401, "no"), AuthenticationError)
    assert AGILE_API.classify(401, "no").message == "Jira Agile API error (401): no"


def test_basic_auth_masks_password() -> None:
    auth = BasicAuth(username="bot", password="secret")
    assert auth.model_dump(mode="json")["password"] == "***"
    assert auth.header_value == "Basic " + base64.b64encode(b"bot:secret").decode()
