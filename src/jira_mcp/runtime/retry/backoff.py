"""Backoff strategies for retry policies.

Pluggable delay calculation for retry attempts. ExponentialBackoff grows
the delay geometrically and adds uniform jitter.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Backoff(Protocol):
    """Protocol for backoff delay calculation.

    Attempt numbers are 0-indexed (wait after the first failure = attempt 0).
    """

    def delay(self, attempt: int) -> float:
        """Delay in seconds before the attempt following ``attempt``."""
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff with uniform additive jitter.

    Delay = min(base * multiplier^attempt + uniform(0, base), max_delay)

    So for attempt n the delay lies in [base * 2^n, base * 2^n + base],
    never above max_delay.

    Attributes:
        base: Initial delay in seconds, also the jitter span (default: 1.0)
        max_delay: Hard cap in seconds (default: 30.0)
        multiplier: Exponential growth factor (default: 2.0)
        jitter: Add uniform(0, base) (default: True)
    """

    base: float = 1.0
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter: bool = True

    def delay(self, attempt: int) -> float:
        d = self.base * (self.multiplier ** attempt)
        if self.jitter:
            d += random.uniform(0, self.base)
        return min(d, self.max_delay)
