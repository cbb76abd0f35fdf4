"""Unified error handling for jira_mcp.

- ErrorCode: Standard error codes for Jira failures
- JiraError and subclasses: typed exceptions raised by the client and tools
- ApiErrorDetails: Jira's structured error document
- JSON type aliases
"""

from .errors import (
    ApiErrorDetails,
    AuthenticationError,
    ConfigurationError,
    ErrorCode,
    ForbiddenError,
    JiraApiError,
    JiraError,
    NotFoundError,
    ParseError,
    ProjectNotAllowedError,
    RateLimitError,
    RequestTimeoutError,
    ServerUnavailableError,
    TransportError,
)
from .types import JsonDict, JsonPrimitive, JsonValue

__all__ = [
    # Codes
    "ErrorCode",
    # Exceptions
    "JiraError", "ConfigurationError", "ProjectNotAllowedError",
    "RequestTimeoutError", "TransportError",
    "JiraApiError", "AuthenticationError", "ForbiddenError", "NotFoundError",
    "RateLimitError", "ServerUnavailableError", "ParseError",
    # Payloads
    "ApiErrorDetails",
    # JSON aliases
    "JsonDict", "JsonPrimitive", "JsonValue",
]
