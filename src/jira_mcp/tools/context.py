"""Shared dependencies handed to every Jira operation."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from jira_mcp.client import JiraClient
from jira_mcp.foundation.config import JiraSettings
from jira_mcp.foundation.errors import ProjectNotAllowedError
from jira_mcp.io.cache import MemoryCache
from jira_mcp.runtime.retry.policy import Sleep


@dataclass(frozen=True, slots=True)
class JiraContext:
    """Settings, client and cache for one server process.

    Example:
        >>> ctx = JiraContext.from_settings(settings)
        >>> issue = await get_issue(ctx, "KP-1")
        >>> await ctx.aclose()
    """

    settings: JiraSettings
    client: JiraClient
    cache: MemoryCache

    @classmethod
    def from_settings(
        cls,
        settings: JiraSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> JiraContext:
        return cls(
            settings=settings,
            client=JiraClient(settings, transport=transport, sleep=sleep),
            cache=MemoryCache(settings.cache_ttl, clock=clock),
        )

    def require_project(self, project_key: str) -> str:
        """Return the key, or raise when JIRA_PROJECTS_FILTER excludes it."""
        if not self.settings.is_project_allowed(project_key):
            raise ProjectNotAllowedError(project_key)
        return project_key

    async def aclose(self) -> None:
        await self.client.aclose()
