"""End-to-end tool calls through an in-memory FastMCP client."""

import orjson
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from jira_mcp.formats import ResponseFormat
from jira_mcp.server import create_server

from .support import json_response, make_context

ISSUE = {
    "id": "10001",
    "key": "KP-1",
    "fields": {"summary": "Login fails", "status": {"name": "Open"}, "labels": ["auth"]},
}


def _server(script: list, **overrides: object):
    ctx, transport = make_context(script, **overrides)
    return create_server(ctx.settings, context=ctx), transport


def _text(result: object) -> str:
    return result.content[0].text


@pytest.mark.asyncio
async def test_every_operation_is_registered() -> None:
    mcp, _ = _server([])

    async with Client(mcp) as client:
        names = {t.name for t in await client.list_tools()}

    assert {
        "jira_search", "jira_get_issue", "jira_create_issue", "jira_update_issue",
        "jira_delete_issue", "jira_get_changelog", "jira_generate_filter_url",
        "jira_get_comments", "jira_add_comment", "jira_update_comment", "jira_delete_comment",
        "jira_get_transitions", "jira_transition_issue",
        "jira_get_projects", "jira_get_project", "jira_get_project_versions", "jira_create_version",
        "jira_get_boards", "jira_get_board_issues", "jira_get_board_configuration",
        "jira_get_sprints", "jira_get_sprint_issues", "jira_create_sprint", "jira_update_sprint",
        "jira_move_issues_to_sprint",
        "jira_get_worklogs", "jira_add_worklog", "jira_delete_worklog",
        "jira_get_link_types", "jira_create_link", "jira_delete_link", "jira_link_to_epic",
        "jira_get_remote_links", "jira_create_remote_link",
        "jira_get_myself", "jira_get_user", "jira_search_users", "jira_get_assignable_users",
        "jira_get_fields", "jira_get_create_meta", "jira_get_issue_types",
        "jira_get_priorities", "jira_get_statuses",
    } <= names


@pytest.mark.asyncio
async def test_read_tool_returns_json() -> None:
    mcp, transport = _server([json_response(200, ISSUE)])

    async with Client(mcp) as client:
        result = await client.call_tool("jira_get_issue", {"issue_key": "KP-1"})

    issue = orjson.loads(_text(result))
    assert issue["key"] == "KP-1"
    assert issue["status"] == "Open"
    assert issue["labels"] == ["auth"]
    assert transport.requests[0].url.path == "/rest/api/2/issue/KP-1"


@pytest.mark.asyncio
async def test_read_tool_returns_toon() -> None:
    mcp, _ = _server([json_response(200, ISSUE)], response_format=ResponseFormat.TOON)

    async with Client(mcp) as client:
        result = await client.call_tool("jira_get_issue", {"issue_key": "KP-1"})

    text = _text(result)
    assert text.startswith("key: KP-1\n")
    assert "summary: Login fails" in text


@pytest.mark.asyncio
async def test_write_tool_returns_confirmation() -> None:
    mcp, _ = _server([json_response(201, {"id": "555", "body": "hi"})])

    async with Client(mcp) as client:
        result = await client.call_tool("jira_add_comment", {"issue_key": "KP-1", "body": "hi"})

    assert _text(result) == "Comment added successfully. Comment ID: 555"


@pytest.mark.asyncio
async def test_jira_errors_become_tool_errors() -> None:
    mcp, _ = _server([json_response(404, {"errorMessages": ["Issue does not exist"]})])

    async with Client(mcp) as client:
        with pytest.raises(ToolError) as exc:
            await client.call_tool("jira_get_issue", {"issue_key": "KP-404"})

    assert "Issue does not exist" in str(exc.value)


@pytest.mark.asyncio
async def test_filtered_project_is_rejected_without_request() -> None:
    mcp, transport = _server([], projects_filter="KP")

    async with Client(mcp) as client:
        with pytest.raises(ToolError) as exc:
            await client.call_tool("jira_get_project", {"project_key": "WEB"})

    assert "WEB" in str(exc.value)
    assert transport.calls == 0
