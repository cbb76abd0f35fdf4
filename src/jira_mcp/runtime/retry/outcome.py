"""Tagged result of a single request attempt.

The retry loop consumes these instead of catching exceptions for expected
transient conditions: an attempt reports what happened and the policy
decides whether another attempt follows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from jira_mcp.foundation.errors import JiraError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Retryable:
    """Transient failure; another attempt may succeed."""

    error: JiraError


@dataclass(frozen=True, slots=True)
class Fatal:
    """Failure that no retry will fix."""

    error: JiraError


Outcome = Success[T] | Retryable | Fatal
