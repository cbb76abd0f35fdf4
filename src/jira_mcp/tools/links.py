"""Issue links, epic links and remote (web) links."""

from __future__ import annotations

from jira_mcp.foundation.errors import JiraError, JsonDict
from jira_mcp.io.cache import CacheKeys
from jira_mcp.transform import (
    SimplifiedLinkType,
    SimplifiedRemoteLink,
    to_simplified_link_type,
    to_simplified_remote_link,
)

from .context import JiraContext

EPIC_MARKER = "epic"


async def get_link_types(ctx: JiraContext) -> list[SimplifiedLinkType]:
    """Configured link types with their inward/outward labels (cached)."""

    async def fetch() -> list[SimplifiedLinkType]:
        raw = await ctx.client.get("/issueLinkType")
        return [to_simplified_link_type(t) for t in (raw or {}).get("issueLinkTypes", ())]

    return await ctx.cache.with_cache(CacheKeys.link_types(), fetch)


async def create_issue_link(
    ctx: JiraContext,
    inward_issue_key: str,
    outward_issue_key: str,
    link_type: str,
    comment: str | None = None,
) -> None:
    body: JsonDict = {
        "type": {"name": link_type},
        "inwardIssue": {"key": inward_issue_key},
        "outwardIssue": {"key": outward_issue_key},
    }
    if comment:
        body["comment"] = {"body": comment}
    await ctx.client.post("/issueLink", body)


async def delete_issue_link(ctx: JiraContext, link_id: str) -> None:
    await ctx.client.delete(f"/issueLink/{link_id}")


def find_epic_link_type(link_types: list[SimplifiedLinkType]) -> SimplifiedLinkType | None:
    """First link type whose name or either label mentions an epic."""
    for lt in link_types:
        labels = (lt.name, lt.inward or "", lt.outward or "")
        if any(EPIC_MARKER in label.lower() for label in labels):
            return lt
    return None


async def link_to_epic(ctx: JiraContext, issue_key: str, epic_key: str) -> SimplifiedLinkType:
    """Link an issue to an epic through the instance's epic link type.

    Raises:
        JiraError: No link type mentions an epic
    """
    link_type = find_epic_link_type(await get_link_types(ctx))
    if link_type is None:
        raise JiraError(
            "No epic link type found. Use jira_update_issue with the appropriate "
            "epic link custom field instead."
        )
    await create_issue_link(ctx, issue_key, epic_key, link_type.name)
    return link_type


async def get_remote_links(ctx: JiraContext, issue_key: str) -> list[SimplifiedRemoteLink]:
    raw = await ctx.client.get(f"/issue/{issue_key}/remotelink")
    return [to_simplified_remote_link(link) for link in raw or ()]


async def create_remote_link(
    ctx: JiraContext,
    issue_key: str,
    url: str,
    title: str,
    *,
    summary: str | None = None,
    relationship: str | None = None,
    icon_url: str | None = None,
    icon_title: str | None = None,
) -> JsonDict:
    """Attach an external URL to an issue. Returns ``{id, self}``."""
    obj: JsonDict = {"url": url, "title": title}
    if summary:
        obj["summary"] = summary
    if icon_url:
        obj["icon"] = {"url16x16": icon_url, "title": icon_title or title}
    body: JsonDict = {"object": obj}
    if relationship:
        body["relationship"] = relationship
    return await ctx.client.post(f"/issue/{issue_key}/remotelink", body)
