"""MCP tool modules for the GitLab file URL server."""
