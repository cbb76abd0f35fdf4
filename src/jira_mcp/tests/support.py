"""Test doubles for the Jira HTTP layer: scripted transport, recording sleep, fake clock."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import httpx
import orjson

from jira_mcp.client import JiraClient
from jira_mcp.foundation.config import JiraSettings
from jira_mcp.tools import JiraContext

BASE_URL = "https://jira.example.com"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(status: int, body: object = None, **kwargs: object) -> httpx.Response:
    """Response with an orjson-encoded body and a JSON content type."""
    if body is None:
        return httpx.Response(status, **kwargs)
    return httpx.Response(
        status,
        content=orjson.dumps(body),
        headers={"content-type": "application/json;charset=UTF-8"},
        **kwargs,
    )


class ScriptedTransport(httpx.MockTransport):
    """MockTransport that replays responses in order and records every request.

    Items may be responses, exceptions (raised as the transport failure) or
    handlers called with the request.
    """

    def __init__(self, script: Iterable[httpx.Response | Exception | Handler]) -> None:
        self.script = list(script)
        self.requests: list[httpx.Request] = []
        super().__init__(self._next)

    def _next(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return item(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


class RecordingSleep:
    """Backoff sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**overrides: object) -> JiraSettings:
    values: dict[str, object] = {
        "base_url": BASE_URL,
        "username": "bot",
        "password": "secret",
        "retry_delay": 100,
    }
    values.update(overrides)
    return JiraSettings(_env_file=None, **values)  # type: ignore[arg-type]


def make_client(
    script: Iterable[httpx.Response | Exception | Handler],
    sleep: RecordingSleep,
    **overrides: object,
) -> tuple[JiraClient, ScriptedTransport]:
    transport = ScriptedTransport(script)
    return JiraClient(make_settings(**overrides), transport=transport, sleep=sleep), transport


def make_context(
    script: Iterable[httpx.Response | Exception | Handler],
    *,
    clock: FakeClock | None = None,
    **overrides: object,
) -> tuple[JiraContext, ScriptedTransport]:
    transport = ScriptedTransport(script)
    ctx = JiraContext.from_settings(
        make_settings(**overrides),
        transport=transport,
        sleep=RecordingSleep(),
        clock=clock or FakeClock(),
    )
    return ctx, transport
