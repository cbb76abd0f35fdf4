"""Resilient async HTTP client for the Jira REST and Agile APIs.

Every request goes through the same path: Basic-Auth headers, a per-attempt
deadline, classification of the response into a tagged Outcome, and the
retry loop with exponential backoff. Callers receive decoded JSON (or None
for empty responses) or a typed JiraError.

Example:
    >>> async with JiraClient(settings) as client:
    ...     me = await client.get("/myself")
    ...     boards = await client.agile_get("/board", params={"maxResults": 10})
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx
import orjson
from pydantic import ValidationError

from jira_mcp.foundation.errors import (
    ApiErrorDetails,
    JsonValue,
    ParseError,
    RequestTimeoutError,
    TransportError,
)
from jira_mcp.runtime.observability import get_logger
from jira_mcp.runtime.retry import (
    ExponentialBackoff,
    Fatal,
    Outcome,
    Retryable,
    RetryPolicy,
    Success,
    execute_with_retry,
)
from jira_mcp.runtime.retry.policy import Sleep

from .auth import BasicAuth
from .families import AGILE_API, REST_API, ApiFamily

if TYPE_CHECKING:
    from jira_mcp.foundation.config import JiraSettings

log = get_logger("jira.client")

QueryValue = str | int | float | bool | list[str] | tuple[str, ...] | None


def build_query(params: Mapping[str, QueryValue]) -> dict[str, str]:
    """Drop None and empty values; render the rest as Jira expects.

    Booleans become ``true``/``false`` and sequences are comma-joined.

    >>> build_query({"jql": "project = KP", "startAt": 0, "expand": None, "q": ""})
    {'jql': 'project = KP', 'startAt': '0'}
    """
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None or (isinstance(value, (str, list, tuple)) and not value):
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            query[key] = ",".join(str(v) for v in value)
        else:
            query[key] = str(value)
    return query


def parse_error_response(response: httpx.Response) -> tuple[str, ApiErrorDetails | None]:
    """Human-readable error text and the structured error document, if any.

    JSON bodies contribute ``errorMessages`` and ``field: message`` pairs
    joined by ``"; "``; other bodies contribute their raw text. Anything
    unreadable falls back to ``HTTP <status>``.
    """
    fallback = f"HTTP {response.status_code}"
    try:
        if "application/json" in response.headers.get("content-type", ""):
            details = ApiErrorDetails.model_validate(orjson.loads(response.content))
            messages = details.messages()
            return ("; ".join(messages) if messages else fallback), details
        return (response.text or fallback), None
    except (orjson.JSONDecodeError, ValidationError, UnicodeDecodeError):
        return fallback, None


def is_empty_response(response: httpx.Response) -> bool:
    return (
        response.status_code == 204
        or response.headers.get("content-length") == "0"
        or not response.content
    )


class JiraClient:
    """Authenticated client shared by every Jira operation.

    The underlying httpx.AsyncClient is created on first use and reused for
    the lifetime of this object. Release it with aclose() or ``async with``.

    Args:
        settings: Connection, timeout, retry and TLS settings
        transport: Custom httpx transport (tests pass httpx.MockTransport)
        sleep: Backoff wait coroutine (tests pass a recorder)
        policy: Override the retry policy derived from settings
    """

    __slots__ = ("_settings", "_auth", "_policy", "_transport", "_sleep", "_client")

    def __init__(
        self,
        settings: JiraSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        policy: RetryPolicy | None = None,
    ) -> None:
        self._settings = settings
        self._auth = BasicAuth(username=settings.username, password=settings.password)
        self._policy = policy or RetryPolicy(
            max_retries=settings.retry_count,
            backoff=ExponentialBackoff(base=settings.retry_delay_seconds),
        )
        self._transport = transport
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None  # Lazy httpx client

    @property
    def settings(self) -> JiraSettings:
        return self._settings

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    # ─────────────────────────────────────────────────────────────────
    # HTTP Client
    # ─────────────────────────────────────────────────────────────────

    def _default_headers(self) -> dict[str, str]:
        return self._auth.apply({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx async client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._default_headers(),
                verify=self._settings.ssl_verify,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def url_for(self, path: str, family: ApiFamily = REST_API) -> str:
        return f"{self._settings.base_url}{family.prefix}{path}"

    async def request(
        self,
        method: str,
        path: str,
        body: JsonValue = None,
        *,
        params: Mapping[str, QueryValue] | None = None,
        family: ApiFamily = REST_API,
    ) -> JsonValue:
        """Perform a request with retry and return the decoded JSON body.

        Returns None for 204 and other empty responses.

        Raises:
            JiraApiError: Non-2xx response (after retries for transient statuses)
            RequestTimeoutError: Every attempt ran past the deadline
            TransportError: Connection failed on every attempt
        """
        url = self.url_for(path, family)
        query = build_query(params) if params else None
        content = orjson.dumps(body) if body is not None else None

        async def attempt(_: int) -> Outcome[JsonValue]:
            return await self._attempt(method, url, content, query, family)

        return await execute_with_retry(
            attempt,
            self._policy,
            operation=f"{method} {family.prefix}{path}",
            sleep=self._sleep,
        )

    async def _attempt(
        self,
        method: str,
        url: str,
        content: bytes | None,
        query: dict[str, str] | None,
        family: ApiFamily,
    ) -> Outcome[JsonValue]:
        """One network exchange, classified into an Outcome."""
        client = await self._get_client()
        timeout = self._settings.timeout_seconds
        log.debug("api request", method=method, url=url, family=family.name)
        start = time.perf_counter()
        try:
            async with asyncio.timeout(timeout):
                response = await client.request(method, url, content=content, params=query)
        except (TimeoutError, httpx.TimeoutException):
            return Retryable(RequestTimeoutError(method, url, timeout))
        except httpx.TransportError as e:
            return Retryable(TransportError(method, url, str(e) or type(e).__name__))

        log.debug(
            "api response",
            method=method,
            url=url,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )

        if response.is_success:
            return self._decode(method, url, response)

        text, details = parse_error_response(response)
        error = family.classify(response.status_code, text, details)
        if self._policy.is_retryable_status(response.status_code):
            return Retryable(error)
        return Fatal(error)

    @staticmethod
    def _decode(method: str, url: str, response: httpx.Response) -> Outcome[JsonValue]:
        if is_empty_response(response):
            return Success(None)
        try:
            return Success(orjson.loads(response.content))
        except orjson.JSONDecodeError as e:
            return Fatal(ParseError(
                f"Invalid JSON in response to {method} {url}: {e}",
                response.status_code,
            ))

    # ─────────────────────────────────────────────────────────────────
    # Convenience
    # ─────────────────────────────────────────────────────────────────

    async def get(self, path: str, *, params: Mapping[str, QueryValue] | None = None) -> JsonValue:
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, body: JsonValue = None, *, params: Mapping[str, QueryValue] | None = None
    ) -> JsonValue:
        return await self.request("POST", path, body, params=params)

    async def put(
        self, path: str, body: JsonValue = None, *, params: Mapping[str, QueryValue] | None = None
    ) -> JsonValue:
        return await self.request("PUT", path, body, params=params)

    async def delete(self, path: str, *, params: Mapping[str, QueryValue] | None = None) -> JsonValue:
        return await self.request("DELETE", path, params=params)

    async def agile_get(self, path: str, *, params: Mapping[str, QueryValue] | None = None) -> JsonValue:
        return await self.request("GET", path, params=params, family=AGILE_API)

    async def agile_post(self, path: str, body: JsonValue = None) -> JsonValue:
        return await self.request("POST", path, body, family=AGILE_API)

    async def agile_put(self, path: str, body: JsonValue = None) -> JsonValue:
        return await self.request("PUT", path, body, family=AGILE_API)
