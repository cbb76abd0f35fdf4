"""Jira HTTP client: auth, API families, retry and error classification."""

from .auth import BasicAuth
from .families import AGILE_API, REST_API, ApiFamily
from .http import JiraClient, build_query, parse_error_response

__all__ = [
    "AGILE_API",
    "REST_API",
    "ApiFamily",
    "BasicAuth",
    "JiraClient",
    "build_query",
    "parse_error_response",
]
