"""Retry with exponential backoff over tagged attempt outcomes."""

from .backoff import Backoff, ExponentialBackoff
from .outcome import Fatal, Outcome, Retryable, Success
from .policy import DEFAULT_RETRYABLE_STATUSES, RetryPolicy, execute_with_retry

__all__ = [
    # Backoff
    "Backoff",
    "ExponentialBackoff",
    # Outcomes
    "Fatal",
    "Outcome",
    "Retryable",
    "Success",
    # Policy
    "DEFAULT_RETRYABLE_STATUSES",
    "RetryPolicy",
    "execute_with_retry",
]
