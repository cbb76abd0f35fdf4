"""Typed errors for Jira access.

Every failure surfaced to a caller is a JiraError subclass carrying an
ErrorCode for programmatic handling and a ``recoverable`` hint for the agent.
API failures additionally carry the HTTP status and the structured error
document returned by Jira, when one was sent.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for Jira failures.

    Used for retry decisions and for presenting errors to the agent.
    """
    CONFIGURATION = "CONFIGURATION"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    API_ERROR = "API_ERROR"
    PROJECT_NOT_ALLOWED = "PROJECT_NOT_ALLOWED"


class ApiErrorDetails(BaseModel):
    """Structured error document returned by Jira on failure.

    Attributes:
        error_messages: Top-level messages (``errorMessages``)
        errors: Field name -> message (``errors``)
        status: Status echoed by the server, if any
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        revalidate_instances="never",
    )

    error_messages: list[str] = Field(default_factory=list, alias="errorMessages")
    errors: dict[str, object] = Field(default_factory=dict)
    status: int | None = None

    @field_validator("error_messages", "errors", mode="before")
    @classmethod
    def _null_as_empty(cls, v: object, info: ValidationInfo) -> object:
        """Jira sends ``null`` for an absent list or map."""
        if v is None:
            return [] if info.field_name == "error_messages" else {}
        return v

    def messages(self) -> list[str]:
        """Flatten into a single message list (field errors as ``field: message``)."""
        return [*self.error_messages, *(f"{k}: {v}" for k, v in self.errors.items())]


class JiraError(Exception):
    """Base exception for everything raised by jira_mcp."""

    code: ClassVar[ErrorCode] = ErrorCode.API_ERROR
    recoverable: ClassVar[bool] = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def render(self) -> str:
        """Format error for LLM consumption."""
        parts = [f"**Jira Error [{self._label()}]:** {self.message}"]
        if self.recoverable:
            parts.append("\n_This error may be transient - retrying later may succeed._")
        return "".join(parts)

    def _label(self) -> str:
        return str(self.code)


class ConfigurationError(JiraError):
    """Required setting missing or invalid. Fatal at startup."""

    code = ErrorCode.CONFIGURATION

    def __init__(self, message: str, *, variable: str | None = None) -> None:
        self.variable = variable
        super().__init__(message)


class ProjectNotAllowedError(JiraError):
    """Project key is outside the configured JIRA_PROJECTS_FILTER."""

    code = ErrorCode.PROJECT_NOT_ALLOWED

    def __init__(self, project_key: str) -> None:
        self.project_key = project_key
        super().__init__(f"Project '{project_key}' is not in JIRA_PROJECTS_FILTER")


class RequestTimeoutError(JiraError):
    """A single attempt exceeded the configured timeout."""

    code = ErrorCode.TIMEOUT
    recoverable = True

    def __init__(self, method: str, url: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"{method} {url} timed out after {timeout:g}s")


class TransportError(JiraError):
    """Connection-level failure (DNS, refused, reset, TLS)."""

    code = ErrorCode.NETWORK_ERROR
    recoverable = True

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(f"{method} {url} failed: {reason}")


class JiraApiError(JiraError):
    """Non-2xx response from Jira.

    Attributes:
        status: HTTP status code
        details: Parsed error document, if the response carried one
    """

    def __init__(self, message: str, status: int, details: ApiErrorDetails | None = None) -> None:
        self.status = status
        self.details = details
        super().__init__(message)

    def _label(self) -> str:
        return f"{self.code} HTTP {self.status}"


class AuthenticationError(JiraApiError):
    code = ErrorCode.AUTHENTICATION_FAILED


class ForbiddenError(JiraApiError):
    """403. On Jira Server this often means a CAPTCHA challenge is pending."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(JiraApiError):
    code = ErrorCode.NOT_FOUND


class RateLimitError(JiraApiError):
    code = ErrorCode.RATE_LIMITED
    recoverable = True


class ServerUnavailableError(JiraApiError):
    """502/503/504 from Jira or a proxy in front of it."""

    code = ErrorCode.SERVER_UNAVAILABLE
    recoverable = True


class ParseError(JiraApiError):
    """2xx response whose body is not valid JSON."""

    code = ErrorCode.PARSE_ERROR
