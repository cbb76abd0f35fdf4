"""Retry policy and the attempt loop.

RetryPolicy says how many extra attempts a request gets, how long to wait
between them and which HTTP statuses count as transient. execute_with_retry
drives an attempt function that returns a tagged Outcome; it never retries a
Fatal outcome and never waits after the final attempt.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, computed_field

from jira_mcp.runtime.observability import get_logger

from .backoff import Backoff, ExponentialBackoff
from .outcome import Fatal, Outcome, Retryable, Success

T = TypeVar("T")

log = get_logger("jira.retry")

# Statuses Jira (or a proxy in front of it) returns for transient conditions
DEFAULT_RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 502, 503, 504})

Sleep = Callable[[float], Awaitable[None]]


class RetryPolicy(BaseModel):
    """Retry configuration for a request.

    Attributes:
        max_retries: Attempts after the first (0 = single attempt)
        backoff: Delay strategy between attempts
        retryable_statuses: HTTP statuses classified as transient

    Example:
        >>> policy = RetryPolicy(
        ...     max_retries=settings.retry_count,
        ...     backoff=ExponentialBackoff(base=settings.retry_delay_seconds),
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # For Backoff protocol
        extra="forbid",
        revalidate_instances="never",
    )

    max_retries: NonNegativeInt = 3
    backoff: Backoff = Field(default_factory=ExponentialBackoff, repr=False)
    retryable_statuses: frozenset[int] = DEFAULT_RETRYABLE_STATUSES

    @computed_field
    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_retryable_status(self, status: int) -> bool:
        return status in self.retryable_statuses

    def get_delay(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (0-indexed)."""
        return self.backoff.delay(attempt)


async def execute_with_retry(
    attempt: Callable[[int], Awaitable[Outcome[T]]],
    policy: RetryPolicy,
    *,
    operation: str,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run ``attempt`` until it succeeds, fails fatally, or attempts run out.

    Attempts are strictly sequential. A Retryable outcome waits
    ``policy.get_delay(n)`` before attempt n+1; after the final attempt its
    error is raised without waiting.

    Args:
        attempt: Async callable taking the 0-indexed attempt number
        policy: Retry configuration
        operation: Label for log entries (e.g. "GET /issue/KP-1")
        sleep: Wait coroutine (injectable for tests)

    Raises:
        JiraError: The Fatal error, or the last Retryable error
    """
    last = policy.max_retries
    for n in range(policy.max_attempts):
        match await attempt(n):
            case Success(value=value):
                return value
            case Fatal(error=error):
                raise error
            case Retryable(error=error) if n == last:
                raise error
            case Retryable(error=error):
                delay = policy.get_delay(n)
                log.warning(
                    "retrying",
                    operation=operation,
                    attempt=n + 1,
                    max_attempts=policy.max_attempts,
                    reason=error.message,
                    delay_ms=round(delay * 1000),
                )
                await sleep(delay)
    raise AssertionError("unreachable: retry loop exited without an outcome")
