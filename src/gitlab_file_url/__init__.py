"""Translate GitLab web UI file URLs into raw content URLs."""

from gitlab_file_url.config import Settings, get_relative_path, get_settings
from gitlab_file_url.core import (
    build_project_url,
    build_raw_url,
    classify_url,
    get_file_fetch_url,
    get_project_id,
    get_request_options,
    translate,
)
from gitlab_file_url.gitlab_client import GitLabClient

__all__ = [
    "GitLabClient",
    "Settings",
    "build_project_url",
    "build_raw_url",
    "classify_url",
    "get_file_fetch_url",
    "get_project_id",
    "get_relative_path",
    "get_request_options",
    "get_settings",
    "translate",
]
