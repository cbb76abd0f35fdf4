"""Raw Jira resources -> simplified resources.

Pure functions: no network, no cache, and the raw input is never mutated.
Raw resources are the decoded JSON documents the client returns.

Example:
    >>> raw = await client.get("/issue/KP-1")
    >>> issue = to_simplified_issue(raw)
    >>> issue.status, issue.labels
    ('In Progress', [])
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from jira_mcp.foundation.errors import JsonValue

from .models import (
    AttachmentSummary,
    CommentSummary,
    IssueLinkSummary,
    IssueRef,
    LinkedIssue,
    Page,
    SimplifiedBoard,
    SimplifiedComment,
    SimplifiedField,
    SimplifiedIssue,
    SimplifiedIssueType,
    SimplifiedLinkType,
    SimplifiedModel,
    SimplifiedPriority,
    SimplifiedProject,
    SimplifiedRemoteLink,
    SimplifiedSearchResult,
    SimplifiedSprint,
    SimplifiedStatus,
    SimplifiedTransition,
    SimplifiedUser,
    SimplifiedVersion,
    SimplifiedWorklog,
    TimeTracking,
    WorklogSummary,
)

M = TypeVar("M", bound=SimplifiedModel)
Raw = Mapping[str, Any]

CUSTOM_FIELD_PREFIX = "customfield_"


def _obj(raw: Raw | None, *path: str) -> Raw:
    """Nested object at ``path``, or an empty mapping when any hop is missing."""
    node: Any = raw or {}
    for key in path:
        node = node.get(key) if isinstance(node, Mapping) else None
        if node is None:
            return {}
    return node if isinstance(node, Mapping) else {}


def _name(raw: Raw | None, key: str, attr: str = "name") -> str | None:
    return _obj(raw, key).get(attr)


def _names(items: list[Raw] | None) -> list[str]:
    return [i["name"] for i in items or () if isinstance(i, Mapping) and i.get("name") is not None]


def extract_custom_fields(fields: Raw) -> dict[str, JsonValue]:
    """Every ``customfield_*`` member whose value is not null."""
    return {
        k: v for k, v in fields.items()
        if k.startswith(CUSTOM_FIELD_PREFIX) and v is not None
    }


# ─────────────────────────────────────────────────────────────────────────────
# Issue parts
# ─────────────────────────────────────────────────────────────────────────────


def _issue_ref(raw: Raw, *, with_status: bool = True, cls: type[IssueRef] = IssueRef) -> IssueRef:
    fields = _obj(raw, "fields")
    return cls(
        key=raw["key"],
        summary=fields.get("summary"),
        status=_name(fields, "status") if with_status else None,
        type=_name(fields, "issuetype"),
    )


def _link(raw: Raw) -> IssueLinkSummary:
    """Direction follows whichever nested issue is present."""
    inward = raw.get("inwardIssue")
    linked = inward if inward else raw.get("outwardIssue")
    direction = "inward" if inward else "outward"
    return IssueLinkSummary(
        id=str(raw["id"]),
        type=_obj(raw, "type").get(direction),
        direction=direction,
        linked_issue=_issue_ref(linked, cls=LinkedIssue) if linked else None,
    )


def _comment_summary(raw: Raw) -> CommentSummary:
    return CommentSummary(
        id=str(raw["id"]),
        author=_name(raw, "author", "displayName"),
        body=raw.get("body"),
        created=raw.get("created"),
        updated=raw.get("updated"),
    )


def _worklog_summary(raw: Raw) -> WorklogSummary:
    return WorklogSummary(
        id=str(raw["id"]),
        author=_name(raw, "author", "displayName"),
        time_spent=raw.get("timeSpent"),
        started=raw.get("started"),
        comment=raw.get("comment"),
    )


def _attachment(raw: Raw) -> AttachmentSummary:
    return AttachmentSummary(
        id=str(raw["id"]),
        filename=raw.get("filename"),
        author=_name(raw, "author", "displayName"),
        size=raw.get("size"),
        mime_type=raw.get("mimeType"),
        created=raw.get("created"),
    )


def _map(items: list[Raw] | None, fn: Callable[[Raw], M]) -> list[M] | None:
    return None if items is None else [fn(i) for i in items]


# ─────────────────────────────────────────────────────────────────────────────
# Resources
# ─────────────────────────────────────────────────────────────────────────────


def to_simplified_issue(issue: Raw) -> SimplifiedIssue:
    fields = _obj(issue, "fields")
    parent = fields.get("parent")
    tracking = fields.get("timetracking")
    return SimplifiedIssue(
        key=issue["key"],
        id=str(issue["id"]),
        self_url=issue.get("self"),
        summary=fields.get("summary"),
        status=_name(fields, "status"),
        status_category=_obj(fields, "status", "statusCategory").get("name"),
        priority=_name(fields, "priority"),
        type=_name(fields, "issuetype"),
        assignee=_name(fields, "assignee", "displayName"),
        assignee_email=_name(fields, "assignee", "emailAddress"),
        reporter=_name(fields, "reporter", "displayName"),
        reporter_email=_name(fields, "reporter", "emailAddress"),
        description=fields.get("description"),
        labels=list(fields.get("labels") or ()),
        components=_names(fields.get("components")),
        fix_versions=_names(fields.get("fixVersions")),
        resolution=_name(fields, "resolution"),
        created=fields.get("created"),
        updated=fields.get("updated"),
        due_date=fields.get("duedate"),
        parent=_issue_ref(parent, with_status=False) if parent else None,
        subtasks=_map(fields.get("subtasks"), _issue_ref),
        links=_map(fields.get("issuelinks"), _link),
        comments=_map(_obj(fields, "comment").get("comments"), _comment_summary),
        worklogs=_map(_obj(fields, "worklog").get("worklogs"), _worklog_summary),
        attachments=_map(fields.get("attachment"), _attachment),
        time_tracking=TimeTracking(
            original_estimate=tracking.get("originalEstimate"),
            remaining_estimate=tracking.get("remainingEstimate"),
            time_spent=tracking.get("timeSpent"),
        ) if tracking else None,
        custom_fields=extract_custom_fields(fields),
    )


def to_simplified_search_result(result: Raw) -> SimplifiedSearchResult:
    """Element-wise issue transform; pagination metadata copied unchanged."""
    issues = [to_simplified_issue(i) for i in result.get("issues") or ()]
    return SimplifiedSearchResult(
        total=result.get("total", len(issues)),
        start_at=result.get("startAt", 0),
        max_results=result.get("maxResults", len(issues)),
        issues=issues,
    )


def to_simplified_page(
    result: Raw,
    transform: Callable[[Raw], M],
    *,
    items_key: str = "values",
) -> Page[M]:
    """Transform one page of a paginated collection.

    Jira names the item list per resource (``values`` for agile
    collections, ``comments``/``worklogs`` for issue children).
    """
    values = [transform(i) for i in result.get(items_key) or ()]
    item_type = type(values[0]) if values else SimplifiedModel
    return Page[item_type](  # type: ignore[valid-type]
        total=result.get("total"),
        start_at=result.get("startAt"),
        max_results=result.get("maxResults"),
        is_last=result.get("isLast"),
        values=values,
    )


def to_simplified_transition(transition: Raw) -> SimplifiedTransition:
    """``required_fields`` is set only when at least one field is required."""
    required = [k for k, f in (transition.get("fields") or {}).items() if f.get("required")]
    to = _obj(transition, "to")
    return SimplifiedTransition(
        id=str(transition["id"]),
        name=transition["name"],
        to_status=to.get("name"),
        to_status_category=_obj(to, "statusCategory").get("name"),
        has_screen=bool(transition.get("hasScreen")),
        required_fields=required or None,
    )


def to_simplified_project(project: Raw) -> SimplifiedProject:
    return SimplifiedProject(
        id=str(project["id"]),
        key=project["key"].upper(),
        name=project.get("name"),
        description=project.get("description"),
        lead=_name(project, "lead", "displayName"),
        project_type=project.get("projectTypeKey"),
    )


def to_simplified_version(version: Raw) -> SimplifiedVersion:
    return SimplifiedVersion(
        id=str(version["id"]),
        name=version["name"],
        description=version.get("description"),
        released=version.get("released"),
        archived=version.get("archived"),
        release_date=version.get("releaseDate"),
        start_date=version.get("startDate"),
    )


def to_simplified_board(board: Raw) -> SimplifiedBoard:
    location = _obj(board, "location")
    return SimplifiedBoard(
        id=board["id"],
        name=board["name"],
        type=board.get("type"),
        project_key=location.get("projectKey"),
        project_name=location.get("projectName"),
    )


def to_simplified_sprint(sprint: Raw) -> SimplifiedSprint:
    return SimplifiedSprint(
        id=sprint["id"],
        name=sprint["name"],
        state=sprint.get("state"),
        start_date=sprint.get("startDate"),
        end_date=sprint.get("endDate"),
        complete_date=sprint.get("completeDate"),
        goal=sprint.get("goal"),
    )


def to_simplified_user(user: Raw) -> SimplifiedUser:
    return SimplifiedUser(
        key=user.get("key"),
        name=user.get("name"),
        display_name=user.get("displayName"),
        email_address=user.get("emailAddress"),
        active=user.get("active"),
        time_zone=user.get("timeZone"),
    )


def to_simplified_field(field: Raw) -> SimplifiedField:
    return SimplifiedField(
        id=str(field["id"]),
        name=field["name"],
        custom=bool(field.get("custom")),
        searchable=field.get("searchable"),
        clause_names=field.get("clauseNames"),
        type=_obj(field, "schema").get("type"),
    )


def to_simplified_issue_type(issue_type: Raw) -> SimplifiedIssueType:
    return SimplifiedIssueType(
        id=str(issue_type["id"]),
        name=issue_type["name"],
        description=issue_type.get("description"),
        subtask=issue_type.get("subtask"),
    )


def to_simplified_comment(comment: Raw) -> SimplifiedComment:
    return SimplifiedComment(
        id=str(comment["id"]),
        author=_name(comment, "author", "displayName"),
        update_author=_name(comment, "updateAuthor", "displayName"),
        body=comment.get("body"),
        created=comment.get("created"),
        updated=comment.get("updated"),
    )


def to_simplified_worklog(worklog: Raw) -> SimplifiedWorklog:
    return SimplifiedWorklog(
        id=str(worklog["id"]),
        author=_name(worklog, "author", "displayName"),
        started=worklog.get("started"),
        time_spent=worklog.get("timeSpent"),
        time_spent_seconds=worklog.get("timeSpentSeconds"),
        comment=worklog.get("comment"),
        created=worklog.get("created"),
        updated=worklog.get("updated"),
    )


def to_simplified_link_type(link_type: Raw) -> SimplifiedLinkType:
    return SimplifiedLinkType(
        id=str(link_type["id"]),
        name=link_type["name"],
        inward=link_type.get("inward"),
        outward=link_type.get("outward"),
    )


def to_simplified_remote_link(link: Raw) -> SimplifiedRemoteLink:
    obj = _obj(link, "object")
    return SimplifiedRemoteLink(
        id=link["id"],
        url=obj.get("url"),
        title=obj.get("title"),
        summary=obj.get("summary"),
        relationship=link.get("relationship"),
    )


def to_simplified_priority(priority: Raw) -> SimplifiedPriority:
    return SimplifiedPriority(
        id=str(priority["id"]),
        name=priority["name"],
        description=priority.get("description"),
    )


def to_simplified_status(status: Raw) -> SimplifiedStatus:
    return SimplifiedStatus(
        id=str(status["id"]),
        name=status["name"],
        description=status.get("description"),
        category=_obj(status, "statusCategory").get("name"),
    )
