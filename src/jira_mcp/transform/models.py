"""Simplified, caller-facing resource shapes.

Each model is a flat projection of a Jira resource that keeps display values
(names, not nested objects). Serialization is camelCase and omits absent
members; list-valued issue fields that Jira may omit are always present.
"""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jira_mcp.foundation.errors import JsonDict, JsonValue

T = TypeVar("T")


class SimplifiedModel(BaseModel):
    """Base for all simplified resources."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        revalidate_instances="never",
    )

    def to_dict(self) -> JsonDict:
        """camelCase dict without absent members, in declaration order."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ─────────────────────────────────────────────────────────────────────────────
# Issue parts
# ─────────────────────────────────────────────────────────────────────────────


class IssueRef(SimplifiedModel):
    """Parent or subtask reference."""

    key: str
    summary: str | None = None
    status: str | None = None
    type: str | None = None


class LinkedIssue(IssueRef):
    """Issue on the far side of an issue link."""


class IssueLinkSummary(SimplifiedModel):
    id: str
    type: str | None = None
    direction: Literal["inward", "outward"]
    linked_issue: LinkedIssue | None = None


class CommentSummary(SimplifiedModel):
    id: str
    author: str | None = None
    body: str | None = None
    created: str | None = None
    updated: str | None = None


class WorklogSummary(SimplifiedModel):
    id: str
    author: str | None = None
    time_spent: str | None = None
    started: str | None = None
    comment: str | None = None


class AttachmentSummary(SimplifiedModel):
    id: str
    filename: str | None = None
    author: str | None = None
    size: int | None = None
    mime_type: str | None = None
    created: str | None = None


class TimeTracking(SimplifiedModel):
    original_estimate: str | None = None
    remaining_estimate: str | None = None
    time_spent: str | None = None


# ─────────────────────────────────────────────────────────────────────────────
# Resources
# ─────────────────────────────────────────────────────────────────────────────


class SimplifiedIssue(SimplifiedModel):
    """Flat issue.

    ``labels``, ``components`` and ``fix_versions`` are never absent.
    Vendor extension fields (``customfield_*``) with non-null values are
    collected into ``custom_fields``.
    """

    key: str
    id: str
    self_url: str | None = Field(default=None, alias="self")
    summary: str | None = None
    status: str | None = None
    status_category: str | None = None
    priority: str | None = None
    type: str | None = None
    assignee: str | None = None
    assignee_email: str | None = None
    reporter: str | None = None
    reporter_email: str | None = None
    description: str | None = None
    labels: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)
    fix_versions: list[str] = Field(default_factory=list)
    resolution: str | None = None
    created: str | None = None
    updated: str | None = None
    due_date: str | None = None
    parent: IssueRef | None = None
    subtasks: list[IssueRef] | None = None
    links: list[IssueLinkSummary] | None = None
    comments: list[CommentSummary] | None = None
    worklogs: list[WorklogSummary] | None = None
    attachments: list[AttachmentSummary] | None = None
    time_tracking: TimeTracking | None = None
    custom_fields: dict[str, JsonValue] = Field(default_factory=dict)


class SimplifiedSearchResult(SimplifiedModel):
    total: int
    start_at: int
    max_results: int
    issues: list[SimplifiedIssue]


class Page(SimplifiedModel, Generic[T]):
    """One page of a paginated collection, metadata copied unchanged."""

    total: int | None = None
    start_at: int | None = None
    max_results: int | None = None
    is_last: bool | None = None
    values: list[T]


class SimplifiedTransition(SimplifiedModel):
    id: str
    name: str
    to_status: str | None = None
    to_status_category: str | None = None
    has_screen: bool = False
    required_fields: list[str] | None = None


class SimplifiedProject(SimplifiedModel):
    id: str
    key: str
    name: str | None = None
    description: str | None = None
    lead: str | None = None
    project_type: str | None = None


class SimplifiedVersion(SimplifiedModel):
    id: str
    name: str
    description: str | None = None
    released: bool | None = None
    archived: bool | None = None
    release_date: str | None = None
    start_date: str | None = None


class SimplifiedBoard(SimplifiedModel):
    id: int
    name: str
    type: str | None = None
    project_key: str | None = None
    project_name: str | None = None


class SimplifiedSprint(SimplifiedModel):
    id: int
    name: str
    state: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    complete_date: str | None = None
    goal: str | None = None


class SimplifiedUser(SimplifiedModel):
    key: str | None = None
    name: str | None = None
    display_name: str | None = None
    email_address: str | None = None
    active: bool | None = None
    time_zone: str | None = None


class SimplifiedField(SimplifiedModel):
    id: str
    name: str
    custom: bool = False
    searchable: bool | None = None
    clause_names: list[str] | None = None
    type: str | None = None


class SimplifiedIssueType(SimplifiedModel):
    id: str
    name: str
    description: str | None = None
    subtask: bool | None = None


class SimplifiedComment(SimplifiedModel):
    id: str
    author: str | None = None
    update_author: str | None = None
    body: str | None = None
    created: str | None = None
    updated: str | None = None


class SimplifiedWorklog(SimplifiedModel):
    id: str
    author: str | None = None
    started: str | None = None
    time_spent: str | None = None
    time_spent_seconds: int | None = None
    comment: str | None = None
    created: str | None = None
    updated: str | None = None


class SimplifiedLinkType(SimplifiedModel):
    id: str
    name: str
    inward: str | None = None
    outward: str | None = None


class SimplifiedRemoteLink(SimplifiedModel):
    id: int
    url: str | None = None
    title: str | None = None
    summary: str | None = None
    relationship: str | None = None


class SimplifiedPriority(SimplifiedModel):
    id: str
    name: str
    description: str | None = None


class SimplifiedStatus(SimplifiedModel):
    id: str
    name: str
    description: str | None = None
    category: str | None = None
