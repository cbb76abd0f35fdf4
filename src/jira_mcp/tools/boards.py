"""Agile board operations."""

from __future__ import annotations

from typing import Final, Literal

from jira_mcp.foundation.errors import JsonValue
from jira_mcp.transform import (
    Page,
    SimplifiedBoard,
    SimplifiedSearchResult,
    to_simplified_board,
    to_simplified_page,
    to_simplified_search_result,
)

from .context import JiraContext

BoardType = Literal["scrum", "kanban"]

# Board and sprint issue listings fetch a lighter field set than search
AGILE_ISSUE_FIELDS: Final[tuple[str, ...]] = (
    "summary", "status", "priority", "issuetype", "assignee", "reporter",
)


async def get_boards(
    ctx: JiraContext,
    project_key_or_id: str | None = None,
    board_type: BoardType | None = None,
    start_at: int = 0,
    max_results: int = 50,
) -> Page[SimplifiedBoard]:
    raw = await ctx.client.agile_get("/board", params={
        "startAt": start_at,
        "maxResults": max_results,
        "projectKeyOrId": project_key_or_id,
        "type": board_type,
    })
    return to_simplified_page(raw, to_simplified_board)


async def get_board_issues(
    ctx: JiraContext,
    board_id: int,
    jql: str | None = None,
    start_at: int = 0,
    max_results: int = 50,
) -> SimplifiedSearchResult:
    raw = await ctx.client.agile_get(f"/board/{board_id}/issue", params={
        "startAt": start_at,
        "maxResults": max_results,
        "fields": list(AGILE_ISSUE_FIELDS),
        "jql": jql,
    })
    return to_simplified_search_result(raw)


async def get_board_configuration(ctx: JiraContext, board_id: int) -> JsonValue:
    """Column, estimation and ranking configuration, as Jira returns it."""
    return await ctx.client.agile_get(f"/board/{board_id}/configuration")
