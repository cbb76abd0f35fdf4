"""Time tracking (worklog) operations."""

from __future__ import annotations

from typing import Literal

from jira_mcp.foundation.errors import JsonDict
from jira_mcp.transform import Page, SimplifiedWorklog, to_simplified_page, to_simplified_worklog

from .context import JiraContext

AdjustEstimate = Literal["auto", "leave", "new", "manual"]


def _estimate_params(
    adjust_estimate: AdjustEstimate | None,
    new_estimate: str | None,
    manual_key: str,
    manual_value: str | None,
) -> dict[str, str] | None:
    """Query for estimate adjustment; extra values apply only to their mode."""
    if not adjust_estimate:
        return None
    params = {"adjustEstimate": adjust_estimate}
    if adjust_estimate == "new" and new_estimate:
        params["newEstimate"] = new_estimate
    if adjust_estimate == "manual" and manual_value:
        params[manual_key] = manual_value
    return params


async def get_worklogs(
    ctx: JiraContext,
    issue_key: str,
    start_at: int = 0,
    max_results: int = 50,
) -> Page[SimplifiedWorklog]:
    raw = await ctx.client.get(
        f"/issue/{issue_key}/worklog",
        params={"startAt": start_at, "maxResults": max_results},
    )
    return to_simplified_page(raw, to_simplified_worklog, items_key="worklogs")


async def add_worklog(
    ctx: JiraContext,
    issue_key: str,
    time_spent: str,
    *,
    comment: str | None = None,
    started: str | None = None,
    adjust_estimate: AdjustEstimate | None = None,
    new_estimate: str | None = None,
    reduce_by: str | None = None,
) -> JsonDict:
    """Log time (``"2h 30m"``). Returns the created worklog document."""
    body: JsonDict = {"timeSpent": time_spent}
    if comment:
        body["comment"] = comment
    if started:
        body["started"] = started
    return await ctx.client.post(
        f"/issue/{issue_key}/worklog",
        body,
        params=_estimate_params(adjust_estimate, new_estimate, "reduceBy", reduce_by),
    )


async def delete_worklog(
    ctx: JiraContext,
    issue_key: str,
    worklog_id: str,
    *,
    adjust_estimate: AdjustEstimate | None = None,
    new_estimate: str | None = None,
    increase_by: str | None = None,
) -> None:
    await ctx.client.delete(
        f"/issue/{issue_key}/worklog/{worklog_id}",
        params=_estimate_params(adjust_estimate, new_estimate, "increaseBy", increase_by),
    )
