"""Project and version operations.

Project-scoped operations reject keys outside JIRA_PROJECTS_FILTER before
any request is made; get_all_projects filters the listing instead.
"""

from __future__ import annotations

from jira_mcp.io.cache import CacheKeys
from jira_mcp.transform import (
    SimplifiedProject,
    SimplifiedVersion,
    to_simplified_project,
    to_simplified_version,
)

from .context import JiraContext


async def get_all_projects(ctx: JiraContext) -> list[SimplifiedProject]:
    """Visible projects, limited to JIRA_PROJECTS_FILTER when one is set (cached)."""

    async def fetch() -> list[SimplifiedProject]:
        raw = await ctx.client.get("/project")
        return [to_simplified_project(p) for p in raw or ()]

    projects = await ctx.cache.with_cache(CacheKeys.projects(), fetch)
    return [p for p in projects if ctx.settings.is_project_allowed(p.key)]


async def get_project(ctx: JiraContext, project_key: str) -> SimplifiedProject:
    ctx.require_project(project_key)
    return to_simplified_project(await ctx.client.get(f"/project/{project_key}"))


async def get_project_versions(ctx: JiraContext, project_key: str) -> list[SimplifiedVersion]:
    ctx.require_project(project_key)
    raw = await ctx.client.get(f"/project/{project_key}/versions")
    return [to_simplified_version(v) for v in raw or ()]


async def create_version(
    ctx: JiraContext,
    project_key: str,
    name: str,
    *,
    description: str | None = None,
    release_date: str | None = None,
    start_date: str | None = None,
    released: bool | None = None,
    archived: bool | None = None,
) -> SimplifiedVersion:
    ctx.require_project(project_key)
    body: dict[str, object] = {"name": name, "project": project_key}
    if description:
        body["description"] = description
    if release_date:
        body["releaseDate"] = release_date
    if start_date:
        body["startDate"] = start_date
    if released is not None:
        body["released"] = released
    if archived is not None:
        body["archived"] = archived
    return to_simplified_version(await ctx.client.post("/version", body))
