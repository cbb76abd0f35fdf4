"""Comment operations."""

from __future__ import annotations

from jira_mcp.foundation.errors import JsonDict
from jira_mcp.transform import Page, SimplifiedComment, to_simplified_comment, to_simplified_page

from .context import JiraContext


async def get_comments(
    ctx: JiraContext,
    issue_key: str,
    start_at: int = 0,
    max_results: int = 50,
) -> Page[SimplifiedComment]:
    raw = await ctx.client.get(
        f"/issue/{issue_key}/comment",
        params={"startAt": start_at, "maxResults": max_results},
    )
    return to_simplified_page(raw, to_simplified_comment, items_key="comments")


async def add_comment(ctx: JiraContext, issue_key: str, body: str) -> JsonDict:
    return await ctx.client.post(f"/issue/{issue_key}/comment", {"body": body})


async def update_comment(ctx: JiraContext, issue_key: str, comment_id: str, body: str) -> SimplifiedComment:
    raw = await ctx.client.put(f"/issue/{issue_key}/comment/{comment_id}", {"body": body})
    return to_simplified_comment(raw)


async def delete_comment(ctx: JiraContext, issue_key: str, comment_id: str) -> None:
    await ctx.client.delete(f"/issue/{issue_key}/comment/{comment_id}")
