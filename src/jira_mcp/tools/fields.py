"""Field catalog and create metadata (all cached)."""

from __future__ import annotations

from collections.abc import Sequence

from jira_mcp.foundation.errors import JsonValue
from jira_mcp.io.cache import CacheKeys
from jira_mcp.transform import (
    SimplifiedField,
    SimplifiedIssueType,
    SimplifiedPriority,
    SimplifiedStatus,
    to_simplified_field,
    to_simplified_issue_type,
    to_simplified_priority,
    to_simplified_status,
)

from .context import JiraContext


async def get_fields(ctx: JiraContext, custom_only: bool = False) -> list[SimplifiedField]:
    """System and custom fields; ``custom_only`` filters after the cache."""

    async def fetch() -> list[SimplifiedField]:
        return [to_simplified_field(f) for f in await ctx.client.get("/field") or ()]

    fields = await ctx.cache.with_cache(CacheKeys.fields(), fetch)
    return [f for f in fields if f.custom] if custom_only else list(fields)


async def get_create_meta(
    ctx: JiraContext,
    project_key: str,
    issue_types: Sequence[str] | None = None,
) -> JsonValue:
    """Fields required and allowed when creating issues, as Jira returns it."""
    ctx.require_project(project_key)
    names = ",".join(issue_types or ())

    async def fetch() -> JsonValue:
        return await ctx.client.get("/issue/createmeta", params={
            "projectKeys": project_key,
            "expand": "projects.issuetypes.fields",
            "issuetypeNames": names,
        })

    return await ctx.cache.with_cache(CacheKeys.create_meta(project_key, names or None), fetch)


async def get_issue_types(ctx: JiraContext, project_key: str) -> list[SimplifiedIssueType]:
    ctx.require_project(project_key)

    async def fetch() -> list[SimplifiedIssueType]:
        meta = await ctx.client.get("/issue/createmeta", params={"projectKeys": project_key})
        projects = (meta or {}).get("projects") or [{}]
        return [to_simplified_issue_type(t) for t in projects[0].get("issuetypes", ())]

    return await ctx.cache.with_cache(CacheKeys.issue_types(project_key), fetch)


async def get_priorities(ctx: JiraContext) -> list[SimplifiedPriority]:
    async def fetch() -> list[SimplifiedPriority]:
        return [to_simplified_priority(p) for p in await ctx.client.get("/priority") or ()]

    return await ctx.cache.with_cache(CacheKeys.priorities(), fetch)


async def get_statuses(ctx: JiraContext) -> list[SimplifiedStatus]:
    async def fetch() -> list[SimplifiedStatus]:
        return [to_simplified_status(s) for s in await ctx.client.get("/status") or ()]

    return await ctx.cache.with_cache(CacheKeys.statuses(), fetch)
