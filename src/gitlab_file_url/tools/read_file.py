"""MCP tool: read_file - read the raw content of a file from its GitLab URL."""

from typing import Any
from urllib.parse import unquote, urlsplit

from mcp.types import Tool

from gitlab_file_url.gitlab_client import GitLabClient


TOOL_DEFINITION = Tool(
    name="read_file",
    description=(
        "Read the raw content of a file given its URL in the GitLab web UI. "
        "The URL is first translated into a raw content URL, which is then "
        "fetched with the configured access token."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "File URL as shown in the GitLab UI",
            },
        },
        "required": ["url"],
    },
)


def _file_name(url: str) -> str:
    """Get the file name from the last segment of a URL path."""
    path = urlsplit(url).path.rstrip("/")
    return unquote(path.rsplit("/", 1)[-1])


async def handle(client: GitLabClient, arguments: dict) -> dict[str, Any]:
    """Execute the read_file tool.

    Returns:
        Dict with the file content and the URL it was fetched from.
    """
    url = arguments.get("url", "").strip()
    if not url:
        raise ValueError("'url' parameter is required")

    fetch_url, content = await client.read_file(url)

    return {
        "url": url,
        "fetch_url": fetch_url,
        "file_name": _file_name(url),
        "size": len(content.encode("utf-8")),
        "content": content,
    }
