"""FastMCP server exposing every Jira operation as a tool.

One tool per operation in jira_mcp.tools. Each handler logs the call, runs
the operation against the shared JiraContext and returns either the result
in the configured response format or a one-line confirmation for writes.
JiraError is re-raised as a FastMCP ToolError carrying ``error.render()``;
anything else propagates unchanged.

Example - stdio (MCP clients):
    $ JIRA_BASE_URL=https://jira.example.com JIRA_USERNAME=bot \\
      JIRA_PASSWORD=secret jira-mcp

Example - embedding:
    >>> mcp = create_server(load_settings())
    >>> mcp.run()
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated, Any, TypeVar

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from jira_mcp import tools
from jira_mcp.formats import format_response
from jira_mcp.foundation.config import JiraSettings, load_settings
from jira_mcp.foundation.errors import ConfigurationError, JiraError
from jira_mcp.runtime.observability import ToolCall, configure_logging, get_logger
from jira_mcp.tools import AdjustEstimate, BoardType, JiraContext, SprintState

SERVER_NAME = "jira-mcp"

T = TypeVar("T")

log = get_logger("jira.server")

# Shared parameter shapes
IssueKey = Annotated[str, Field(description="Issue key (e.g. KP-123) or numeric issue ID")]
ProjectKey = Annotated[str, Field(description="Project key (e.g. KP)")]
StartAt = Annotated[int, Field(ge=0, description="Starting index for pagination")]
MaxResults = Annotated[int, Field(ge=1, le=100, description="Maximum number of results")]
BoardId = Annotated[int, Field(description="Board ID (from jira_get_boards)")]
SprintId = Annotated[int, Field(description="Sprint ID (from jira_get_sprints)")]
Text = Annotated[str | None, Field(description="Optional text")]
Date = Annotated[str | None, Field(description="Date, YYYY-MM-DD")]
DateTime = Annotated[str | None, Field(description="ISO date-time, e.g. 2024-01-15T09:00:00.000Z")]
Names = Annotated[list[str] | None, Field(description="Names; replaces the current values")]
Jql = Annotated[str | None, Field(description="Additional JQL filter")]
FieldValues = Annotated[dict[str, Any] | None, Field(description="Fields keyed by field ID (customfield_*)")]
Estimate = Annotated[
    AdjustEstimate | None,
    Field(description="Remaining estimate handling: auto, leave, new or manual"),
]
NewEstimate = Annotated[str | None, Field(description="Remaining estimate when adjust_estimate=new")]


def create_server(settings: JiraSettings, *, context: JiraContext | None = None) -> FastMCP:
    """Build the FastMCP server with every Jira tool registered.

    Args:
        settings: Loaded settings (response format, connection, cache)
        context: Shared dependencies; built from settings when omitted
    """
    ctx = context or JiraContext.from_settings(settings)
    fmt = settings.response_format

    @asynccontextmanager
    async def lifespan(_: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await ctx.aclose()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    async def run(
        tool: str,
        operation: Callable[[], Awaitable[T]],
        confirm: Callable[[T], str] | None = None,
        /,
        **arguments: Any,
    ) -> str:
        """Log, execute and render one tool call."""
        call = ToolCall.start(tool, arguments)
        try:
            result = await operation()
        except JiraError as e:
            call.fail(e)
            raise ToolError(e.render()) from e
        except Exception as e:
            call.fail(e)
            raise
        call.end(result)
        return confirm(result) if confirm else format_response(result, fmt)

    # ─────────────────────────────────────────────────────────────────
    # Issues
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_search",
        description=(
            "Search issues with JQL (Jira Query Language). Filter by project, status, "
            "assignee, labels, sprint or any combination. Returns keys, summaries, "
            "statuses and assignees with pagination metadata."
        ),
    )
    async def jira_search(
        jql: Annotated[str, Field(description='JQL query, e.g. "project = KP AND status = Open"')],
        max_results: MaxResults = 50,
        start_at: StartAt = 0,
        fields: Annotated[list[str] | None, Field(description="Fields to return")] = None,
    ) -> str:
        return await run(
            "jira_search",
            lambda: tools.search_issues(ctx, jql, max_results, start_at, fields),
            jql=jql, max_results=max_results, start_at=start_at, fields=fields,
        )

    @mcp.tool(
        name="jira_get_issue",
        description=(
            "Full details of one issue: description, status, people, comments, "
            "worklogs, attachments, subtasks and links."
        ),
    )
    async def jira_get_issue(
        issue_key: IssueKey,
        expand: Annotated[list[str] | None, Field(description="Expansions, e.g. changelog")] = None,
    ) -> str:
        return await run(
            "jira_get_issue",
            lambda: tools.get_issue(ctx, issue_key, expand),
            issue_key=issue_key, expand=expand,
        )

    @mcp.tool(
        name="jira_create_issue",
        description=(
            "Create an issue in a project. Use jira_get_issue_types for valid types and "
            "jira_get_create_meta for required fields. Subtasks need parent_key."
        ),
    )
    async def jira_create_issue(
        project_key: ProjectKey,
        issue_type: Annotated[str, Field(description="Issue type name (Bug, Task, Story, Epic, Sub-task)")],
        summary: Annotated[str, Field(description="Issue title")],
        description: Text = None,
        assignee: Annotated[str | None, Field(description="Username to assign to")] = None,
        priority: Annotated[str | None, Field(description="Priority name (e.g. High)")] = None,
        labels: Names = None,
        components: Names = None,
        fix_versions: Names = None,
        due_date: Date = None,
        parent_key: Annotated[str | None, Field(description="Parent issue key for subtasks")] = None,
        custom_fields: FieldValues = None,
    ) -> str:
        return await run(
            "jira_create_issue",
            lambda: tools.create_issue(
                ctx, project_key, issue_type, summary,
                description=description, assignee=assignee, priority=priority, labels=labels,
                components=components, fix_versions=fix_versions, due_date=due_date,
                parent_key=parent_key, custom_fields=custom_fields,
            ),
            project_key=project_key, issue_type=issue_type, summary=summary,
            description=description, assignee=assignee, priority=priority, labels=labels,
            components=components, fix_versions=fix_versions, due_date=due_date,
            parent_key=parent_key, custom_fields=custom_fields,
        )

    @mcp.tool(
        name="jira_update_issue",
        description=(
            "Change fields of an existing issue. Only the fields given are modified; "
            'assignee "" unassigns.'
        ),
    )
    async def jira_update_issue(
        issue_key: IssueKey,
        summary: Text = None,
        description: Text = None,
        assignee: Annotated[str | None, Field(description='Username, or "" to unassign')] = None,
        priority: Annotated[str | None, Field(description="Priority name")] = None,
        labels: Names = None,
        components: Names = None,
        fix_versions: Names = None,
        due_date: Date = None,
        custom_fields: FieldValues = None,
    ) -> str:
        return await run(
            "jira_update_issue",
            lambda: tools.update_issue(
                ctx, issue_key, summary=summary, description=description, assignee=assignee,
                priority=priority, labels=labels, components=components,
                fix_versions=fix_versions, due_date=due_date, custom_fields=custom_fields,
            ),
            lambda _: f"Issue {issue_key} updated successfully.",
            issue_key=issue_key, summary=summary, description=description, assignee=assignee,
            priority=priority, labels=labels, components=components,
            fix_versions=fix_versions, due_date=due_date, custom_fields=custom_fields,
        )

    @mcp.tool(
        name="jira_delete_issue",
        description=(
            "Permanently delete an issue. Cannot be undone. Issues with subtasks "
            "require delete_subtasks=true."
        ),
    )
    async def jira_delete_issue(
        issue_key: IssueKey,
        delete_subtasks: Annotated[bool, Field(description="Also delete subtasks")] = False,
    ) -> str:
        return await run(
            "jira_delete_issue",
            lambda: tools.delete_issue(ctx, issue_key, delete_subtasks),
            lambda _: f"Issue {issue_key} deleted successfully.",
            issue_key=issue_key, delete_subtasks=delete_subtasks,
        )

    @mcp.tool(
        name="jira_get_changelog",
        description="Change history of an issue: who changed which field, when, from and to.",
    )
    async def jira_get_changelog(
        issue_key: IssueKey,
        start_at: StartAt = 0,
        max_results: MaxResults = 100,
    ) -> str:
        return await run(
            "jira_get_changelog",
            lambda: tools.get_issue_changelog(ctx, issue_key, start_at, max_results),
            issue_key=issue_key, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(
        name="jira_generate_filter_url",
        description=(
            "Validate a JQL query by running it, then return a shareable issue navigator "
            "URL together with the first 50 matching issues."
        ),
    )
    async def jira_generate_filter_url(
        jql: Annotated[str, Field(description='JQL query, e.g. "updated >= -7d"')],
    ) -> str:
        return await run("jira_generate_filter_url", lambda: tools.generate_filter_url(ctx, jql), jql=jql)

    # ─────────────────────────────────────────────────────────────────
    # Comments
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(name="jira_get_comments", description="Comments on an issue with authors and timestamps.")
    async def jira_get_comments(
        issue_key: IssueKey,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_comments",
            lambda: tools.get_comments(ctx, issue_key, start_at, max_results),
            issue_key=issue_key, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(name="jira_add_comment", description="Add a comment to an issue. Supports Jira wiki markup.")
    async def jira_add_comment(
        issue_key: IssueKey,
        body: Annotated[str, Field(description="Comment text")],
    ) -> str:
        return await run(
            "jira_add_comment",
            lambda: tools.add_comment(ctx, issue_key, body),
            lambda c: f"Comment added successfully. Comment ID: {c['id']}",
            issue_key=issue_key, body=body,
        )

    @mcp.tool(
        name="jira_update_comment",
        description="Replace the text of an existing comment (ID from jira_get_comments).",
    )
    async def jira_update_comment(
        issue_key: IssueKey,
        comment_id: Annotated[str, Field(description="Comment ID")],
        body: Annotated[str, Field(description="New comment text")],
    ) -> str:
        return await run(
            "jira_update_comment",
            lambda: tools.update_comment(ctx, issue_key, comment_id, body),
            lambda _: f"Comment {comment_id} updated successfully.",
            issue_key=issue_key, comment_id=comment_id, body=body,
        )

    @mcp.tool(name="jira_delete_comment", description="Permanently delete a comment from an issue.")
    async def jira_delete_comment(
        issue_key: IssueKey,
        comment_id: Annotated[str, Field(description="Comment ID")],
    ) -> str:
        return await run(
            "jira_delete_comment",
            lambda: tools.delete_comment(ctx, issue_key, comment_id),
            lambda _: f"Comment {comment_id} deleted successfully.",
            issue_key=issue_key, comment_id=comment_id,
        )

    # ─────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_get_transitions",
        description=(
            "Workflow transitions available from the issue's current status, with "
            "target statuses and required fields. Call before jira_transition_issue."
        ),
    )
    async def jira_get_transitions(issue_key: IssueKey) -> str:
        return await run(
            "jira_get_transitions", lambda: tools.get_transitions(ctx, issue_key), issue_key=issue_key
        )

    @mcp.tool(
        name="jira_transition_issue",
        description="Move an issue to another status using a transition ID from jira_get_transitions.",
    )
    async def jira_transition_issue(
        issue_key: IssueKey,
        transition_id: Annotated[str, Field(description='Transition ID, e.g. "21"')],
        comment: Annotated[str | None, Field(description="Comment added with the transition")] = None,
        fields: FieldValues = None,
    ) -> str:
        return await run(
            "jira_transition_issue",
            lambda: tools.transition_issue(ctx, issue_key, transition_id, comment, fields),
            lambda _: f"Issue {issue_key} transitioned successfully.",
            issue_key=issue_key, transition_id=transition_id, comment=comment, fields=fields,
        )

    # ─────────────────────────────────────────────────────────────────
    # Projects
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_get_projects",
        description="Projects visible to the authenticated user, limited to JIRA_PROJECTS_FILTER when set.",
    )
    async def jira_get_projects() -> str:
        return await run("jira_get_projects", lambda: tools.get_all_projects(ctx))

    @mcp.tool(name="jira_get_project", description="Details of one project: description, lead and type.")
    async def jira_get_project(project_key: ProjectKey) -> str:
        return await run("jira_get_project", lambda: tools.get_project(ctx, project_key), project_key=project_key)

    @mcp.tool(
        name="jira_get_project_versions",
        description="Versions (releases) of a project with release state and dates.",
    )
    async def jira_get_project_versions(project_key: ProjectKey) -> str:
        return await run(
            "jira_get_project_versions",
            lambda: tools.get_project_versions(ctx, project_key),
            project_key=project_key,
        )

    @mcp.tool(
        name="jira_create_version",
        description="Create a version (release) in a project for use as a fix version.",
    )
    async def jira_create_version(
        project_key: ProjectKey,
        name: Annotated[str, Field(description='Version name, e.g. "v1.2.0"')],
        description: Text = None,
        release_date: Date = None,
        start_date: Date = None,
        released: Annotated[bool | None, Field(description="Already released")] = None,
        archived: Annotated[bool | None, Field(description="Archived")] = None,
    ) -> str:
        return await run(
            "jira_create_version",
            lambda: tools.create_version(
                ctx, project_key, name, description=description, release_date=release_date,
                start_date=start_date, released=released, archived=archived,
            ),
            project_key=project_key, name=name, description=description, release_date=release_date,
            start_date=start_date, released=released, archived=archived,
        )

    # ─────────────────────────────────────────────────────────────────
    # Boards and sprints
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_get_boards",
        description="Agile boards (scrum and kanban), optionally filtered by project or type.",
    )
    async def jira_get_boards(
        project_key: Annotated[str | None, Field(description="Project key or ID")] = None,
        board_type: Annotated[BoardType | None, Field(description="scrum or kanban")] = None,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_boards",
            lambda: tools.get_boards(ctx, project_key, board_type, start_at, max_results),
            project_key=project_key, board_type=board_type, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(
        name="jira_get_board_issues",
        description="Issues on a board (backlog and active sprints), optionally narrowed by JQL.",
    )
    async def jira_get_board_issues(
        board_id: BoardId,
        jql: Jql = None,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_board_issues",
            lambda: tools.get_board_issues(ctx, board_id, jql, start_at, max_results),
            board_id=board_id, jql=jql, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(
        name="jira_get_board_configuration",
        description="Column, estimation and ranking configuration of a board.",
    )
    async def jira_get_board_configuration(board_id: BoardId) -> str:
        return await run(
            "jira_get_board_configuration",
            lambda: tools.get_board_configuration(ctx, board_id),
            board_id=board_id,
        )

    @mcp.tool(name="jira_get_sprints", description="Sprints of a scrum board with goals, dates and states.")
    async def jira_get_sprints(
        board_id: BoardId,
        state: Annotated[SprintState | None, Field(description="active, future or closed")] = None,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_sprints",
            lambda: tools.get_sprints(ctx, board_id, state, start_at, max_results),
            board_id=board_id, state=state, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(name="jira_get_sprint_issues", description="Issues in a sprint, optionally narrowed by JQL.")
    async def jira_get_sprint_issues(
        sprint_id: SprintId,
        jql: Jql = None,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_sprint_issues",
            lambda: tools.get_sprint_issues(ctx, sprint_id, jql, start_at, max_results),
            sprint_id=sprint_id, jql=jql, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(
        name="jira_create_sprint",
        description="Create a sprint on a scrum board. New sprints start in the future state.",
    )
    async def jira_create_sprint(
        name: Annotated[str, Field(description="Sprint name")],
        board_id: BoardId,
        goal: Text = None,
        start_date: DateTime = None,
        end_date: DateTime = None,
    ) -> str:
        return await run(
            "jira_create_sprint",
            lambda: tools.create_sprint(
                ctx, name, board_id, goal=goal, start_date=start_date, end_date=end_date,
            ),
            name=name, board_id=board_id, goal=goal, start_date=start_date, end_date=end_date,
        )

    @mcp.tool(
        name="jira_update_sprint",
        description='Change a sprint. state "active" starts it and "closed" completes it.',
    )
    async def jira_update_sprint(
        sprint_id: SprintId,
        name: Text = None,
        goal: Text = None,
        start_date: DateTime = None,
        end_date: DateTime = None,
        state: Annotated[SprintState | None, Field(description="active, future or closed")] = None,
    ) -> str:
        return await run(
            "jira_update_sprint",
            lambda: tools.update_sprint(
                ctx, sprint_id, name=name, goal=goal,
                start_date=start_date, end_date=end_date, state=state,
            ),
            sprint_id=sprint_id, name=name, goal=goal,
            start_date=start_date, end_date=end_date, state=state,
        )

    @mcp.tool(
        name="jira_move_issues_to_sprint",
        description="Move issues into a sprint, removing them from their current sprint.",
    )
    async def jira_move_issues_to_sprint(
        sprint_id: SprintId,
        issue_keys: Annotated[list[str], Field(min_length=1, description='Issue keys, e.g. ["KP-1", "KP-2"]')],
    ) -> str:
        return await run(
            "jira_move_issues_to_sprint",
            lambda: tools.move_issues_to_sprint(ctx, sprint_id, issue_keys),
            lambda _: f"Moved {len(issue_keys)} issue(s) to sprint {sprint_id}.",
            sprint_id=sprint_id, issue_keys=issue_keys,
        )

    # ─────────────────────────────────────────────────────────────────
    # Worklogs
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(name="jira_get_worklogs", description="Time tracking entries logged on an issue.")
    async def jira_get_worklogs(
        issue_key: IssueKey,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_worklogs",
            lambda: tools.get_worklogs(ctx, issue_key, start_at, max_results),
            issue_key=issue_key, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(
        name="jira_add_worklog",
        description='Log time on an issue. Durations like "2h", "30m", "1d" or "2h 30m".',
    )
    async def jira_add_worklog(
        issue_key: IssueKey,
        time_spent: Annotated[str, Field(description='Duration, e.g. "2h 30m"')],
        comment: Text = None,
        started: Annotated[str | None, Field(description="Start time, e.g. 2024-01-15T09:00:00.000+0000")] = None,
        adjust_estimate: Estimate = None,
        new_estimate: NewEstimate = None,
        reduce_by: Annotated[str | None, Field(description="Reduction when adjust_estimate=manual")] = None,
    ) -> str:
        return await run(
            "jira_add_worklog",
            lambda: tools.add_worklog(
                ctx, issue_key, time_spent, comment=comment, started=started,
                adjust_estimate=adjust_estimate, new_estimate=new_estimate, reduce_by=reduce_by,
            ),
            lambda w: (
                f"Worklog added successfully. Worklog ID: {w['id']}, "
                f"Time logged: {w.get('timeSpent', time_spent)}"
            ),
            issue_key=issue_key, time_spent=time_spent, comment=comment, started=started,
            adjust_estimate=adjust_estimate, new_estimate=new_estimate, reduce_by=reduce_by,
        )

    @mcp.tool(name="jira_delete_worklog", description="Delete a worklog entry from an issue.")
    async def jira_delete_worklog(
        issue_key: IssueKey,
        worklog_id: Annotated[str, Field(description="Worklog ID")],
        adjust_estimate: Estimate = None,
        new_estimate: NewEstimate = None,
        increase_by: Annotated[str | None, Field(description="Increase when adjust_estimate=manual")] = None,
    ) -> str:
        return await run(
            "jira_delete_worklog",
            lambda: tools.delete_worklog(
                ctx, issue_key, worklog_id, adjust_estimate=adjust_estimate,
                new_estimate=new_estimate, increase_by=increase_by,
            ),
            lambda _: f"Worklog {worklog_id} deleted successfully.",
            issue_key=issue_key, worklog_id=worklog_id, adjust_estimate=adjust_estimate,
            new_estimate=new_estimate, increase_by=increase_by,
        )

    # ─────────────────────────────────────────────────────────────────
    # Links
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_get_link_types",
        description="Issue link types with their inward and outward labels. Call before jira_create_link.",
    )
    async def jira_get_link_types() -> str:
        return await run("jira_get_link_types", lambda: tools.get_link_types(ctx))

    @mcp.tool(
        name="jira_create_link",
        description=(
            "Link two issues. The outward issue performs the relation on the inward "
            'issue (KP-2 "blocks" KP-1).'
        ),
    )
    async def jira_create_link(
        inward_issue_key: Annotated[str, Field(description="Issue receiving the relation")],
        outward_issue_key: Annotated[str, Field(description="Issue performing the relation")],
        link_type: Annotated[str, Field(description='Link type name, e.g. "Blocks"')],
        comment: Text = None,
    ) -> str:
        return await run(
            "jira_create_link",
            lambda: tools.create_issue_link(ctx, inward_issue_key, outward_issue_key, link_type, comment),
            lambda _: f"Link created: {inward_issue_key} -> {outward_issue_key} ({link_type})",
            inward_issue_key=inward_issue_key, outward_issue_key=outward_issue_key,
            link_type=link_type, comment=comment,
        )

    @mcp.tool(name="jira_delete_link", description="Remove a link between two issues.")
    async def jira_delete_link(
        link_id: Annotated[str, Field(description="Link ID (from jira_get_issue links)")],
    ) -> str:
        return await run(
            "jira_delete_link",
            lambda: tools.delete_issue_link(ctx, link_id),
            lambda _: f"Link {link_id} deleted successfully.",
            link_id=link_id,
        )

    @mcp.tool(
        name="jira_link_to_epic",
        description="Link an issue to an epic using the instance's epic link type.",
    )
    async def jira_link_to_epic(
        issue_key: IssueKey,
        epic_key: Annotated[str, Field(description="Epic issue key")],
    ) -> str:
        return await run(
            "jira_link_to_epic",
            lambda: tools.link_to_epic(ctx, issue_key, epic_key),
            lambda link_type: f"Link created: {issue_key} -> {epic_key} ({link_type.name})",
            issue_key=issue_key, epic_key=epic_key,
        )

    @mcp.tool(
        name="jira_get_remote_links",
        description="External URL links (pull requests, documents, pages) attached to an issue.",
    )
    async def jira_get_remote_links(issue_key: IssueKey) -> str:
        return await run(
            "jira_get_remote_links", lambda: tools.get_remote_links(ctx, issue_key), issue_key=issue_key
        )

    @mcp.tool(name="jira_create_remote_link", description="Attach an external URL to an issue.")
    async def jira_create_remote_link(
        issue_key: IssueKey,
        url: Annotated[str, Field(description="Full URL")],
        title: Annotated[str, Field(description="Display title")],
        summary: Text = None,
        relationship: Annotated[str | None, Field(description='Relationship label, e.g. "mentioned in"')] = None,
        icon_url: Annotated[str | None, Field(description="16x16 icon URL")] = None,
        icon_title: Annotated[str | None, Field(description="Icon tooltip")] = None,
    ) -> str:
        return await run(
            "jira_create_remote_link",
            lambda: tools.create_remote_link(
                ctx, issue_key, url, title, summary=summary, relationship=relationship,
                icon_url=icon_url, icon_title=icon_title,
            ),
            lambda link: f"Remote link created. Link ID: {link['id']}",
            issue_key=issue_key, url=url, title=title, summary=summary,
            relationship=relationship, icon_url=icon_url, icon_title=icon_title,
        )

    # ─────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(
        name="jira_get_myself",
        description="Profile of the authenticated user. Useful to verify the connection.",
    )
    async def jira_get_myself() -> str:
        return await run("jira_get_myself", lambda: tools.get_current_user(ctx))

    @mcp.tool(name="jira_get_user", description="Look up a user by exact username.")
    async def jira_get_user(username: Annotated[str, Field(description="Exact username")]) -> str:
        return await run("jira_get_user", lambda: tools.get_user(ctx, username), username=username)

    @mcp.tool(name="jira_search_users", description="Find users by name, username or email.")
    async def jira_search_users(
        query: Annotated[str, Field(description="Search text")],
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_search_users",
            lambda: tools.search_users(ctx, query, start_at, max_results),
            query=query, start_at=start_at, max_results=max_results,
        )

    @mcp.tool(name="jira_get_assignable_users", description="Users who may be assigned issues in a project.")
    async def jira_get_assignable_users(
        project_key: ProjectKey,
        query: Annotated[str | None, Field(description="Narrow by name or username")] = None,
        start_at: StartAt = 0,
        max_results: MaxResults = 50,
    ) -> str:
        return await run(
            "jira_get_assignable_users",
            lambda: tools.get_assignable_users(ctx, project_key, query, start_at, max_results),
            project_key=project_key, query=query, start_at=start_at, max_results=max_results,
        )

    # ─────────────────────────────────────────────────────────────────
    # Fields and metadata
    # ─────────────────────────────────────────────────────────────────

    @mcp.tool(name="jira_get_fields", description="System and custom fields with IDs and JQL clause names.")
    async def jira_get_fields(
        custom_only: Annotated[bool, Field(description="Only custom fields")] = False,
    ) -> str:
        return await run("jira_get_fields", lambda: tools.get_fields(ctx, custom_only), custom_only=custom_only)

    @mcp.tool(
        name="jira_get_create_meta",
        description="Required and allowed fields for creating issues in a project. Call before jira_create_issue.",
    )
    async def jira_get_create_meta(
        project_key: ProjectKey,
        issue_types: Annotated[list[str] | None, Field(description='Limit to issue types, e.g. ["Bug"]')] = None,
    ) -> str:
        return await run(
            "jira_get_create_meta",
            lambda: tools.get_create_meta(ctx, project_key, issue_types),
            project_key=project_key, issue_types=issue_types,
        )

    @mcp.tool(name="jira_get_issue_types", description="Issue types available in a project.")
    async def jira_get_issue_types(project_key: ProjectKey) -> str:
        return await run(
            "jira_get_issue_types", lambda: tools.get_issue_types(ctx, project_key), project_key=project_key
        )

    @mcp.tool(name="jira_get_priorities", description="Priorities configured on the instance.")
    async def jira_get_priorities() -> str:
        return await run("jira_get_priorities", lambda: tools.get_priorities(ctx))

    @mcp.tool(name="jira_get_statuses", description="Workflow statuses with their categories.")
    async def jira_get_statuses() -> str:
        return await run("jira_get_statuses", lambda: tools.get_statuses(ctx))

    return mcp


def main() -> None:
    """Console entry point: load settings, configure logging, serve over stdio."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    configure_logging(format=settings.log_format, level=settings.log_level)
    log.info(
        "starting server",
        base_url=settings.base_url,
        response_format=str(settings.response_format),
        projects_filter=list(settings.projects_filter),
    )
    create_server(settings).run()


if __name__ == "__main__":
    main()
