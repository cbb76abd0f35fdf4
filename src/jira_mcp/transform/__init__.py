"""Transformation of raw Jira resources into simplified shapes."""

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
from .transformers import (
    CUSTOM_FIELD_PREFIX,
    extract_custom_fields,
    to_simplified_board,
    to_simplified_comment,
    to_simplified_field,
    to_simplified_issue,
    to_simplified_issue_type,
    to_simplified_link_type,
    to_simplified_page,
    to_simplified_priority,
    to_simplified_project,
    to_simplified_remote_link,
    to_simplified_search_result,
    to_simplified_sprint,
    to_simplified_status,
    to_simplified_transition,
    to_simplified_user,
    to_simplified_version,
    to_simplified_worklog,
)

__all__ = [
    # Models
    "AttachmentSummary",
    "CommentSummary",
    "IssueLinkSummary",
    "IssueRef",
    "LinkedIssue",
    "Page",
    "SimplifiedBoard",
    "SimplifiedComment",
    "SimplifiedField",
    "SimplifiedIssue",
    "SimplifiedIssueType",
    "SimplifiedLinkType",
    "SimplifiedModel",
    "SimplifiedPriority",
    "SimplifiedProject",
    "SimplifiedRemoteLink",
    "SimplifiedSearchResult",
    "SimplifiedSprint",
    "SimplifiedStatus",
    "SimplifiedTransition",
    "SimplifiedUser",
    "SimplifiedVersion",
    "SimplifiedWorklog",
    "TimeTracking",
    "WorklogSummary",
    # Transformers
    "CUSTOM_FIELD_PREFIX",
    "extract_custom_fields",
    "to_simplified_board",
    "to_simplified_comment",
    "to_simplified_field",
    "to_simplified_issue",
    "to_simplified_issue_type",
    "to_simplified_link_type",
    "to_simplified_page",
    "to_simplified_priority",
    "to_simplified_project",
    "to_simplified_remote_link",
    "to_simplified_search_result",
    "to_simplified_sprint",
    "to_simplified_status",
    "to_simplified_transition",
    "to_simplified_user",
    "to_simplified_version",
    "to_simplified_worklog",
]
