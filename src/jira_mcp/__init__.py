"""jira_mcp - Jira REST API exposed as MCP tools.

A resilient async client for the Jira REST (v2) and Agile (1.0) APIs, a TTL
cache for slow-changing catalogs, a transformer that flattens Jira resources
into compact caller-facing shapes, and a FastMCP server with one tool per
operation.

Quick Start (server):
    $ export JIRA_BASE_URL=https://jira.example.com
    $ export JIRA_USERNAME=bot JIRA_PASSWORD=secret
    $ jira-mcp

Library use:
    >>> from jira_mcp import JiraContext, load_settings
    >>> from jira_mcp.tools import search_issues
    >>>
    >>> ctx = JiraContext.from_settings(load_settings())
    >>> result = await search_issues(ctx, "project = KP AND status = Open")
    >>> [i.key for i in result.issues]
    ['KP-7', 'KP-3']
    >>> await ctx.aclose()

Output formats:
    >>> from jira_mcp.formats import ResponseFormat, format_response
    >>> print(format_response({"a": 1, "b": "line1\\nline2"}, ResponseFormat.TOON))
    a: 1
    b: |
      line1
      line2
"""

from jira_mcp.client import JiraClient
from jira_mcp.formats import ResponseFormat, format_response
from jira_mcp.foundation.config import JiraSettings, get_settings, load_settings
from jira_mcp.foundation.errors import (
    ConfigurationError,
    ErrorCode,
    JiraApiError,
    JiraError,
    ProjectNotAllowedError,
)
from jira_mcp.io.cache import CacheKeys, MemoryCache
from jira_mcp.tools import JiraContext

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "JiraSettings",
    "get_settings",
    "load_settings",
    # Errors
    "ConfigurationError",
    "ErrorCode",
    "JiraApiError",
    "JiraError",
    "ProjectNotAllowedError",
    # Core
    "CacheKeys",
    "JiraClient",
    "JiraContext",
    "MemoryCache",
    "ResponseFormat",
    "format_response",
]
