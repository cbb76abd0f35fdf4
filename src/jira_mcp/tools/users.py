"""User lookup."""

from __future__ import annotations

from jira_mcp.transform import SimplifiedUser, to_simplified_user

from .context import JiraContext


async def get_current_user(ctx: JiraContext) -> SimplifiedUser:
    return to_simplified_user(await ctx.client.get("/myself"))


async def get_user(ctx: JiraContext, username: str) -> SimplifiedUser:
    return to_simplified_user(await ctx.client.get("/user", params={"username": username}))


async def search_users(
    ctx: JiraContext,
    query: str,
    start_at: int = 0,
    max_results: int = 50,
) -> list[SimplifiedUser]:
    raw = await ctx.client.get("/user/search", params={
        "username": query,
        "startAt": start_at,
        "maxResults": max_results,
    })
    return [to_simplified_user(u) for u in raw or ()]


async def get_assignable_users(
    ctx: JiraContext,
    project_key: str,
    query: str | None = None,
    start_at: int = 0,
    max_results: int = 50,
) -> list[SimplifiedUser]:
    ctx.require_project(project_key)
    raw = await ctx.client.get("/user/assignable/search", params={
        "project": project_key,
        "startAt": start_at,
        "maxResults": max_results,
        "username": query,
    })
    return [to_simplified_user(u) for u in raw or ()]
