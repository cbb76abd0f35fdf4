"""Jira API families and their status -> error mapping.

Both families share transport, auth and retry; they differ only in path
prefix and in how much detail their error classification carries.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from jira_mcp.foundation.config import AGILE_API_PREFIX, REST_API_PREFIX
from jira_mcp.foundation.errors import (
    ApiErrorDetails,
    AuthenticationError,
    ForbiddenError,
    JiraApiError,
    NotFoundError,
    RateLimitError,
    ServerUnavailableError,
)

ErrorFactory = Callable[[str, int, ApiErrorDetails | None], JiraApiError]

AUTH_FAILED_MESSAGE = "Authentication failed. Check your JIRA_USERNAME and JIRA_PASSWORD."
FORBIDDEN_MESSAGE = (
    "Access forbidden. CAPTCHA may be triggered - log in via browser first, or check permissions."
)


@dataclass(frozen=True, slots=True)
class ApiFamily:
    """One REST API family under the Jira base URL.

    Attributes:
        name: Short identifier used in logs
        prefix: Path prefix appended to the base URL
        label: Display name used in generic error messages
        error_map: Status -> error factory; unmapped statuses become JiraApiError
    """

    name: str
    prefix: str
    label: str
    error_map: Mapping[int, ErrorFactory] = field(default_factory=dict)

    def generic_message(self, status: int, text: str) -> str:
        return f"{self.label} error ({status}): {text}"

    def classify(self, status: int, text: str, details: ApiErrorDetails | None = None) -> JiraApiError:
        """Typed error for a non-2xx response."""
        factory = self.error_map.get(status)
        if factory is None:
            return JiraApiError(self.generic_message(status, text), status, details)
        return factory(text, status, details)


def _generic(cls: type[JiraApiError], label: str) -> ErrorFactory:
    def build(text: str, status: int, details: ApiErrorDetails | None) -> JiraApiError:
        return cls(f"{label} error ({status}): {text}", status, details)
    return build


def _fixed(cls: type[JiraApiError], message: str) -> ErrorFactory:
    def build(text: str, status: int, details: ApiErrorDetails | None) -> JiraApiError:
        return cls(message, status, details)
    return build


def _not_found(text: str, status: int, details: ApiErrorDetails | None) -> JiraApiError:
    return NotFoundError(f"Resource not found: {text}", status, details)


_REST_LABEL = "Jira API"
_AGILE_LABEL = "Jira Agile API"
_UNAVAILABLE = (502, 503, 504)

REST_API = ApiFamily(
    name="rest",
    prefix=REST_API_PREFIX,
    label=_REST_LABEL,
    error_map=MappingProxyType({
        401: _fixed(AuthenticationError, AUTH_FAILED_MESSAGE),
        403: _fixed(ForbiddenError, FORBIDDEN_MESSAGE),
        404: _not_found,
        429: _generic(RateLimitError, _REST_LABEL),
        **{s: _generic(ServerUnavailableError, _REST_LABEL) for s in _UNAVAILABLE},
    }),
)

# Agile keeps one message shape for every status; only the error kind varies
AGILE_API = ApiFamily(
    name="agile",
    prefix=AGILE_API_PREFIX,
    label=_AGILE_LABEL,
    error_map=MappingProxyType({
        401: _generic(AuthenticationError, _AGILE_LABEL),
        403: _generic(ForbiddenError, _AGILE_LABEL),
        404: _generic(NotFoundError, _AGILE_LABEL),
        429: _generic(RateLimitError, _AGILE_LABEL),
        **{s: _generic(ServerUnavailableError, _AGILE_LABEL) for s in _UNAVAILABLE},
    }),
)
