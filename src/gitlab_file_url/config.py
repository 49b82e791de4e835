"""Configuration management for the GitLab file URL integration."""

from urllib.parse import urlsplit

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


GITLAB_HOST = "gitlab.com"


class Settings(BaseSettings):
    """GitLab integration configuration loaded from environment variables.

    Environment variables are prefixed with GITLAB_FILE_URL_.
    Example: GITLAB_FILE_URL_TOKEN=glpat-xxxx
    """

    model_config = {"env_prefix": "GITLAB_FILE_URL_"}

    host: str = Field(
        default=GITLAB_HOST,
        description="Host name of the GitLab instance, without scheme or path",
    )
    base_url: str = Field(
        default="",
        description=(
            "Root URL of the GitLab web UI. May include a relative path for "
            "instances mounted under a sub-path. Defaults to https://{host}."
        ),
    )
    api_base_url: str = Field(
        default="",
        description="Root URL of the GitLab API. Defaults to {base_url}/api/v4.",
    )
    token: str = Field(
        default="",
        description="GitLab personal access token. Empty string means anonymous access.",
    )
    timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @model_validator(mode="after")
    def _fill_defaults(self) -> "Settings":
        # host may carry a port, but never a scheme or path
        if not self.host or "/" in self.host:
            raise ValueError(f"Invalid GitLab host '{self.host}'")

        if self.base_url:
            self.base_url = _checked_url("base_url", self.base_url)
        else:
            self.base_url = f"https://{self.host}"

        if self.api_base_url:
            self.api_base_url = _checked_url("api_base_url", self.api_base_url)
        else:
            self.api_base_url = f"{self.base_url}/api/v4"

        return self


def _checked_url(name: str, value: str) -> str:
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"Invalid {name} '{value}', expected an absolute http(s) URL")
    return value.rstrip("/")


def get_settings() -> Settings:
    """Create and return a Settings instance from environment variables."""
    return Settings()


def get_relative_path(settings: Settings) -> str:
    """Return the sub-path the instance is mounted under, or "" if none.

    gitlab.com is never mounted under a sub-path.
    Example: base_url "https://git.example.com/gitlab/" gives "/gitlab".
    """
    if settings.host == GITLAB_HOST:
        return ""
    return urlsplit(settings.base_url).path.rstrip("/")
