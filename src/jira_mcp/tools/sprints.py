"""Agile sprint operations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from jira_mcp.transform import (
    Page,
    SimplifiedSearchResult,
    SimplifiedSprint,
    to_simplified_page,
    to_simplified_search_result,
    to_simplified_sprint,
)

from .boards import AGILE_ISSUE_FIELDS
from .context import JiraContext

SprintState = Literal["active", "future", "closed"]


async def get_sprints(
    ctx: JiraContext,
    board_id: int,
    state: SprintState | None = None,
    start_at: int = 0,
    max_results: int = 50,
) -> Page[SimplifiedSprint]:
    raw = await ctx.client.agile_get(f"/board/{board_id}/sprint", params={
        "startAt": start_at,
        "maxResults": max_results,
        "state": state,
    })
    return to_simplified_page(raw, to_simplified_sprint)


async def get_sprint_issues(
    ctx: JiraContext,
    sprint_id: int,
    jql: str | None = None,
    start_at: int = 0,
    max_results: int = 50,
) -> SimplifiedSearchResult:
    raw = await ctx.client.agile_get(f"/sprint/{sprint_id}/issue", params={
        "startAt": start_at,
        "maxResults": max_results,
        "fields": list(AGILE_ISSUE_FIELDS),
        "jql": jql,
    })
    return to_simplified_search_result(raw)


async def create_sprint(
    ctx: JiraContext,
    name: str,
    board_id: int,
    *,
    goal: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> SimplifiedSprint:
    """New sprints start in the ``future`` state."""
    body: dict[str, object] = {"name": name, "originBoardId": board_id}
    if goal:
        body["goal"] = goal
    if start_date:
        body["startDate"] = start_date
    if end_date:
        body["endDate"] = end_date
    return to_simplified_sprint(await ctx.client.agile_post("/sprint", body))


async def update_sprint(
    ctx: JiraContext,
    sprint_id: int,
    *,
    name: str | None = None,
    goal: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    state: SprintState | None = None,
) -> SimplifiedSprint:
    """``state="active"`` starts the sprint, ``"closed"`` completes it."""
    body: dict[str, object] = {}
    if name:
        body["name"] = name
    if goal is not None:
        body["goal"] = goal
    if start_date:
        body["startDate"] = start_date
    if end_date:
        body["endDate"] = end_date
    if state:
        body["state"] = state
    return to_simplified_sprint(await ctx.client.agile_put(f"/sprint/{sprint_id}", body))


async def move_issues_to_sprint(ctx: JiraContext, sprint_id: int, issue_keys: Sequence[str]) -> None:
    await ctx.client.agile_post(f"/sprint/{sprint_id}/issue", {"issues": list(issue_keys)})
