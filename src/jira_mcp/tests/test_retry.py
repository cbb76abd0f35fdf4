"""Tests for backoff strategies and the retry loop."""

import pytest

from jira_mcp.foundation.errors import NotFoundError, ServerUnavailableError
from jira_mcp.runtime.retry import (
    ExponentialBackoff,
    Fatal,
    Outcome,
    Retryable,
    RetryPolicy,
    Success,
    execute_with_retry,
)

from .support import RecordingSleep


class TestExponentialBackoff:
    """Delay for attempt n lies in [d*2^n, d*2^n + d], capped at 30s."""

    @pytest.mark.parametrize("base", [0.1, 1.0, 2.5])
    @pytest.mark.parametrize("attempt", [0, 1, 2, 3])
    def test_delay_bounds(self, base: float, attempt: int) -> None:
        backoff = ExponentialBackoff(base=base)
        low = base * 2 ** attempt
        for _ in range(50):
            d = backoff.delay(attempt)
            assert min(low, 30.0) <= d <= min(low + base, 30.0)

    def test_delay_capped(self) -> None:
        backoff = ExponentialBackoff(base=1.0)
        assert backoff.delay(10) == 30.0

    def test_without_jitter(self) -> None:
        backoff = ExponentialBackoff(base=0.5, jitter=False)
        assert [backoff.delay(n) for n in range(4)] == [0.5, 1.0, 2.0, 4.0]


def test_policy_attempts_and_statuses() -> None:
    policy = RetryPolicy(max_retries=3)
    assert policy.max_attempts == 4
    assert all(policy.is_retryable_status(s) for s in (429, 502, 503, 504))
    assert not any(policy.is_retryable_status(s) for s in (400, 401, 403, 404, 500))
    assert RetryPolicy(max_retries=0).max_attempts == 1


def test_policy_allows_many_retries() -> None:
    assert RetryPolicy(max_retries=25).max_attempts == 26


def _scripted(outcomes: list[Outcome[str]]) -> tuple[list[int], object]:
    seen: list[int] = []

    async def attempt(n: int) -> Outcome[str]:
        seen.append(n)
        return outcomes[n]

    return seen, attempt


def _unavailable() -> Retryable:
    return Retryable(ServerUnavailableError("Jira API error (503): down", 503))


@pytest.mark.asyncio
async def test_success_after_retries(sleep: RecordingSleep) -> None:
    seen, attempt = _scripted([_unavailable(), _unavailable(), Success("ok")])
    policy = RetryPolicy(max_retries=3, backoff=ExponentialBackoff(base=0.5, jitter=False))

    result = await execute_with_retry(attempt, policy, operation="GET /x", sleep=sleep)

    assert result == "ok"
    assert seen == [0, 1, 2]
    assert sleep.delays == [0.5, 1.0]


@pytest.mark.asyncio
async def test_fatal_is_not_retried(sleep: RecordingSleep) -> None:
    error = NotFoundError("Resource not found: gone", 404)
    seen, attempt = _scripted([Fatal(error), Success("never")])

    with pytest.raises(NotFoundError) as exc:
        await execute_with_retry(attempt, RetryPolicy(max_retries=3), operation="GET /x", sleep=sleep)

    assert exc.value is error
    assert seen == [0]
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_exhausted_raises_last_error_without_final_wait(sleep: RecordingSleep) -> None:
    outcomes = [_unavailable() for _ in range(3)]
    seen, attempt = _scripted(outcomes)
    policy = RetryPolicy(max_retries=2, backoff=ExponentialBackoff(base=1.0, jitter=False))

    with pytest.raises(ServerUnavailableError) as exc:
        await execute_with_retry(attempt, policy, operation="GET /x", sleep=sleep)

    assert exc.value is outcomes[-1].error
    assert seen == [0, 1, 2]
    assert len(sleep.delays) == 2


@pytest.mark.asyncio
async def test_zero_retries_single_attempt(sleep: RecordingSleep) -> None:
    seen, attempt = _scripted([_unavailable()])

    with pytest.raises(ServerUnavailableError):
        await execute_with_retry(attempt, RetryPolicy(max_retries=0), operation="GET /x", sleep=sleep)

    assert seen == [0]
    assert sleep.delays == []
