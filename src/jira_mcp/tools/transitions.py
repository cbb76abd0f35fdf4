"""Workflow transitions."""

from __future__ import annotations

from jira_mcp.foundation.errors import JsonDict
from jira_mcp.transform import SimplifiedTransition, to_simplified_transition

from .context import JiraContext


async def get_transitions(ctx: JiraContext, issue_key: str) -> list[SimplifiedTransition]:
    """Transitions available from the issue's current status, with field requirements."""
    raw = await ctx.client.get(
        f"/issue/{issue_key}/transitions",
        params={"expand": "transitions.fields"},
    )
    return [to_simplified_transition(t) for t in (raw or {}).get("transitions", ())]


async def transition_issue(
    ctx: JiraContext,
    issue_key: str,
    transition_id: str,
    comment: str | None = None,
    fields: JsonDict | None = None,
) -> None:
    body: JsonDict = {"transition": {"id": transition_id}}
    if comment:
        body["update"] = {"comment": [{"add": {"body": comment}}]}
    if fields:
        body["fields"] = fields
    await ctx.client.post(f"/issue/{issue_key}/transitions", body)
