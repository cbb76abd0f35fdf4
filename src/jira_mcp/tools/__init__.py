"""Jira operations, one async function per tool.

Every operation takes a JiraContext first and returns a simplified model,
a list of them, a raw Jira document, or None for confirmations.
"""

from .boards import AGILE_ISSUE_FIELDS, BoardType, get_board_configuration, get_board_issues, get_boards
from .comments import add_comment, delete_comment, get_comments, update_comment
from .context import JiraContext
from .fields import get_create_meta, get_fields, get_issue_types, get_priorities, get_statuses
from .issues import (
    DEFAULT_SEARCH_FIELDS,
    ISSUE_FIELDS,
    create_issue,
    delete_issue,
    generate_filter_url,
    get_issue,
    get_issue_changelog,
    search_issues,
    update_issue,
)
from .links import (
    create_issue_link,
    create_remote_link,
    delete_issue_link,
    find_epic_link_type,
    get_link_types,
    get_remote_links,
    link_to_epic,
)
from .projects import create_version, get_all_projects, get_project, get_project_versions
from .sprints import (
    SprintState,
    create_sprint,
    get_sprint_issues,
    get_sprints,
    move_issues_to_sprint,
    update_sprint,
)
from .transitions import get_transitions, transition_issue
from .users import get_assignable_users, get_current_user, get_user, search_users
from .worklogs import AdjustEstimate, add_worklog, delete_worklog, get_worklogs

__all__ = [
    "JiraContext",
    # Issues
    "DEFAULT_SEARCH_FIELDS", "ISSUE_FIELDS",
    "search_issues", "get_issue", "create_issue", "update_issue", "delete_issue",
    "get_issue_changelog", "generate_filter_url",
    # Comments
    "get_comments", "add_comment", "update_comment", "delete_comment",
    # Transitions
    "get_transitions", "transition_issue",
    # Projects
    "get_all_projects", "get_project", "get_project_versions", "create_version",
    # Boards
    "AGILE_ISSUE_FIELDS", "BoardType",
    "get_boards", "get_board_issues", "get_board_configuration",
    # Sprints
    "SprintState",
    "get_sprints", "get_sprint_issues", "create_sprint", "update_sprint", "move_issues_to_sprint",
    # Worklogs
    "AdjustEstimate", "get_worklogs", "add_worklog", "delete_worklog",
    # Links
    "get_link_types", "create_issue_link", "delete_issue_link", "find_epic_link_type",
    "link_to_epic", "get_remote_links", "create_remote_link",
    # Users
    "get_current_user", "get_user", "search_users", "get_assignable_users",
    # Fields
    "get_fields", "get_create_meta", "get_issue_types", "get_priorities", "get_statuses",
]
