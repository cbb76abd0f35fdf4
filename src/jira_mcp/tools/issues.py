"""Issue operations: search, read, create, update, delete, history."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final
from urllib.parse import quote

from jira_mcp.foundation.errors import JsonDict, JsonValue
from jira_mcp.transform import (
    SimplifiedIssue,
    SimplifiedSearchResult,
    to_simplified_issue,
    to_simplified_search_result,
)

from .context import JiraContext

DEFAULT_SEARCH_FIELDS: Final[tuple[str, ...]] = (
    "summary", "status", "priority", "issuetype", "assignee", "reporter",
    "description", "labels", "components", "fixVersions", "resolution",
    "created", "updated", "duedate", "parent", "subtasks", "issuelinks",
    "comment", "worklog", "attachment", "timetracking",
)
ISSUE_FIELDS: Final[tuple[str, ...]] = (*DEFAULT_SEARCH_FIELDS, "versions")

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"
FILTER_PREVIEW_SIZE = 50


async def search_issues(
    ctx: JiraContext,
    jql: str,
    max_results: int = 50,
    start_at: int = 0,
    fields: Sequence[str] | None = None,
) -> SimplifiedSearchResult:
    raw = await ctx.client.get("/search", params={
        "jql": jql,
        "maxResults": max_results,
        "startAt": start_at,
        "fields": list(fields or DEFAULT_SEARCH_FIELDS),
    })
    return to_simplified_search_result(raw)


async def get_issue(
    ctx: JiraContext,
    issue_key: str,
    expand: Sequence[str] | None = None,
) -> SimplifiedIssue:
    raw = await ctx.client.get(f"/issue/{issue_key}", params={
        "fields": list(ISSUE_FIELDS),
        "expand": list(expand or ()),
    })
    return to_simplified_issue(raw)


async def create_issue(
    ctx: JiraContext,
    project_key: str,
    issue_type: str,
    summary: str,
    *,
    description: str | None = None,
    assignee: str | None = None,
    priority: str | None = None,
    labels: Sequence[str] | None = None,
    components: Sequence[str] | None = None,
    fix_versions: Sequence[str] | None = None,
    due_date: str | None = None,
    parent_key: str | None = None,
    custom_fields: JsonDict | None = None,
) -> JsonDict:
    """Create an issue. Returns Jira's ``{id, key, self}`` document."""
    ctx.require_project(project_key)
    fields: JsonDict = {
        "project": {"key": project_key},
        "issuetype": {"name": issue_type},
        "summary": summary,
    }
    if description:
        fields["description"] = description
    if assignee:
        fields["assignee"] = {"name": assignee}
    if priority:
        fields["priority"] = {"name": priority}
    if labels is not None:
        fields["labels"] = list(labels)
    if components is not None:
        fields["components"] = [{"name": n} for n in components]
    if fix_versions is not None:
        fields["fixVersions"] = [{"name": n} for n in fix_versions]
    if due_date:
        fields["duedate"] = due_date
    if parent_key:
        fields["parent"] = {"key": parent_key}
    if custom_fields:
        fields.update(custom_fields)
    return await ctx.client.post("/issue", {"fields": fields})


async def update_issue(
    ctx: JiraContext,
    issue_key: str,
    *,
    summary: str | None = None,
    description: str | None = None,
    assignee: str | None = None,
    priority: str | None = None,
    labels: Sequence[str] | None = None,
    components: Sequence[str] | None = None,
    fix_versions: Sequence[str] | None = None,
    due_date: str | None = None,
    custom_fields: JsonDict | None = None,
) -> None:
    """Change only the given fields. ``assignee=""`` unassigns."""
    fields: JsonDict = {}
    if summary is not None:
        fields["summary"] = summary
    if description is not None:
        fields["description"] = description
    if assignee is not None:
        fields["assignee"] = {"name": assignee} if assignee else None
    if priority is not None:
        fields["priority"] = {"name": priority}
    if labels is not None:
        fields["labels"] = list(labels)
    if components is not None:
        fields["components"] = [{"name": n} for n in components]
    if fix_versions is not None:
        fields["fixVersions"] = [{"name": n} for n in fix_versions]
    if due_date is not None:
        fields["duedate"] = due_date
    if custom_fields:
        fields.update(custom_fields)
    await ctx.client.put(f"/issue/{issue_key}", {"fields": fields})


async def delete_issue(ctx: JiraContext, issue_key: str, delete_subtasks: bool = False) -> None:
    await ctx.client.delete(
        f"/issue/{issue_key}",
        params={"deleteSubtasks": True} if delete_subtasks else None,
    )


async def get_issue_changelog(
    ctx: JiraContext,
    issue_key: str,
    start_at: int = 0,
    max_results: int = 100,
) -> JsonValue:
    """The issue's ``changelog`` document (histories of field changes)."""
    raw = await ctx.client.get(f"/issue/{issue_key}", params={
        "expand": "changelog",
        "fields": "key",
        "startAt": start_at,
        "maxResults": max_results,
    })
    return (raw or {}).get("changelog")


async def generate_filter_url(ctx: JiraContext, jql: str) -> JsonDict:
    """Validate ``jql`` with a search, then build a shareable issue navigator URL."""
    result = await search_issues(ctx, jql, FILTER_PREVIEW_SIZE, 0)
    return {
        "url": f"{ctx.settings.base_url}/issues/?jql={quote(jql, safe=_URI_COMPONENT_SAFE)}",
        "jql": jql,
        "summary": {
            "total": result.total,
            "returned": len(result.issues),
            "maxResults": result.max_results,
        },
        "issues": result.issues,
    }
