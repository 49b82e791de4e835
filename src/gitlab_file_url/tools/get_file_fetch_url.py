"""MCP tool: get_file_fetch_url - translate a GitLab file URL into a raw content URL."""

from typing import Any

from mcp.types import Tool

from gitlab_file_url.gitlab_client import GitLabClient


TOOL_DEFINITION = Tool(
    name="get_file_fetch_url",
    description=(
        "Translate the URL of a file in the GitLab web UI into a URL that returns "
        "the raw file content. Supports legacy '/blob/' URLs for YAML files and "
        "nested-group '/-/blob/' URLs, which require a project ID lookup."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": (
                    "File URL as shown in the GitLab UI "
                    "(e.g. 'https://gitlab.com/group/sub/repo/-/blob/main/catalog-info.yaml')"
                ),
            },
        },
        "required": ["url"],
    },
)


async def handle(client: GitLabClient, arguments: dict) -> dict[str, Any]:
    """Execute the get_file_fetch_url tool."""
    url = arguments.get("url", "").strip()
    if not url:
        raise ValueError("'url' parameter is required")

    fetch_url = await client.resolve_fetch_url(url)
    return {"url": url, "fetch_url": fetch_url}
