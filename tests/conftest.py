"""Shared test fixtures for the GitLab file URL tests."""

import pytest

from gitlab_file_url.config import Settings
from gitlab_file_url.gitlab_client import GitLabClient


@pytest.fixture
def settings():
    """Create test settings for gitlab.com."""
    return Settings(
        host="gitlab.com",
        token="test-token",
        timeout=5.0,
    )


@pytest.fixture
def prefixed_settings():
    """Create test settings for a self-hosted instance mounted under /gitlab."""
    return Settings(
        host="gitlab.example.com",
        base_url="https://gitlab.example.com/gitlab",
        token="test-token",
        timeout=5.0,
    )


@pytest.fixture
def client(settings):
    """Create a GitLabClient with test settings."""
    return GitLabClient(settings)

