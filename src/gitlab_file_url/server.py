"""MCP server entry point for the GitLab file URL server."""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from gitlab_file_url.config import get_relative_path, get_settings
from gitlab_file_url.exceptions import GitLabFileUrlError
from gitlab_file_url.gitlab_client import GitLabClient
from gitlab_file_url.logging import setup_logging
from gitlab_file_url.tools import get_file_fetch_url, read_file


logger = logging.getLogger("gitlab_file_url")

# Global instances
_settings = get_settings()
_gitlab_client: GitLabClient | None = None
_server = Server("gitlab-file-url")


def get_gitlab_client() -> GitLabClient:
    """Get or create the global GitLab client instance."""
    global _gitlab_client
    if _gitlab_client is None:
        _gitlab_client = GitLabClient(_settings)
    return _gitlab_client


def _error_response(message: str) -> list[TextContent]:
    """Create an error response for MCP tool calls."""
    return [TextContent(type="text", text=json.dumps({"error": message}))]


def _success_response(data: dict | list) -> list[TextContent]:
    """Create a success response for MCP tool calls."""
    return [TextContent(type="text", text=json.dumps(data, indent=2))]


_TOOL_HANDLERS = {
    "get_file_fetch_url": get_file_fetch_url,
    "read_file": read_file,
}


@_server.list_tools()
async def list_tools() -> list[Tool]:
    """Return the list of available tools."""
    return [module.TOOL_DEFINITION for module in _TOOL_HANDLERS.values()]


@_server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Dispatch MCP tool calls."""
    handler_module = _TOOL_HANDLERS.get(name)
    if handler_module is None:
        return _error_response(f"Unknown tool: {name}")

    try:
        result = await handler_module.handle(get_gitlab_client(), arguments)
        return _success_response(result)
    except GitLabFileUrlError as exc:
        logger.error("Tool %s failed: %s", name, exc.message)
        return _error_response(exc.message)
    except ValueError as exc:
        logger.warning("Tool %s bad input: %s", name, exc)
        return _error_response(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error in tool %s", name)
        return _error_response(f"Internal error: {exc}")


async def run_server() -> None:
    """Run the MCP server over stdio."""
    setup_logging(_settings.log_level)
    logger.info("Starting GitLab file URL MCP server")
    logger.info("GitLab host: %s (relative path: %r)", _settings.host, get_relative_path(_settings))
    logger.info("Authenticated: %s", bool(_settings.token))

    client = get_gitlab_client()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await _server.run(
                read_stream,
                write_stream,
                _server.create_initialization_options(),
            )
    finally:
        await client.close()


def main() -> None:
    """Entry point for the gitlab-file-url-mcp command."""
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
