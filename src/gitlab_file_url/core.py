"""Translation of GitLab "view file" URLs into raw content URLs.

Converts
from: https://gitlab.example.com/a/b/blob/master/c.yaml
to:   https://gitlab.example.com/a/b/raw/master/c.yaml
or
from: https://gitlab.com/groupA/teams/teamA/subgroupA/repoA/-/blob/branch/filepath
to:   https://gitlab.com/api/v4/projects/<id>/repository/files/filepath/raw?ref=branch

The second form needs the numeric project ID, which is looked up through the
GitLab projects API on every call.
"""

import logging
import math
import re
from enum import Enum
from typing import Any
from urllib.parse import SplitResult, quote, unquote, urlsplit, urlunsplit

import httpx

from gitlab_file_url.config import Settings, get_relative_path
from gitlab_file_url.exceptions import (
    GitLabAPIError,
    InvalidUrlError,
    NestedGroupUrlRequiredError,
    ProjectIdLookupError,
)


logger = logging.getLogger("gitlab_file_url")

NESTED_BLOB_MARKER = "/-/blob/"

_YAML_SUFFIX = re.compile(r"\.(yaml|yml)\Z")

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Printable characters a WHATWG URL path keeps as they are
_PATH_SAFE = "/%!$&'()*+,;=:@[]\\^|"

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

_DEFAULT_PORTS = {"http": 80, "https": 443}

_JS_NUMBER = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|Infinity)")

_MISSING = object()


class UrlShape(str, Enum):
    """The two GitLab file URL shapes that can be translated."""

    BLOB = "blob"
    NESTED_BLOB = "nested_blob"


def classify_url(url: str) -> UrlShape:
    """Classify a file URL by shape.

    Any URL containing /-/blob/ anywhere is treated as a nested-group URL,
    even when the marker is not part of a real nested-group path.
    """
    if NESTED_BLOB_MARKER in url:
        return UrlShape.NESTED_BLOB
    return UrlShape.BLOB


async def get_file_fetch_url(
    url: str,
    settings: Settings,
    http: httpx.AsyncClient | None = None,
) -> str:
    """Given a URL pointing to a file, return a URL for fetching its raw content.

    Args:
        url: GitLab web UI URL of a file.
        settings: GitLab integration configuration.
        http: HTTP client used for the project ID lookup. A temporary one is
            created when omitted.

    Raises:
        InvalidUrlError: The URL does not have a supported shape.
        ProjectIdLookupError: The project ID of a nested-group URL could not
            be resolved.
    """
    shape = classify_url(url)
    logger.debug("Translating %s URL: %s", shape.value, url)

    if shape is UrlShape.NESTED_BLOB:
        project_id = await get_project_id(url, settings, http)
        return build_project_url(url, project_id, settings)
    return build_raw_url(url)


translate = get_file_fetch_url


def get_request_options(settings: Settings) -> dict[str, dict[str, str]]:
    """Build the request options needed to make requests to GitLab."""
    return {
        "headers": {
            "PRIVATE-TOKEN": settings.token or "",
        },
    }


def build_raw_url(target: str) -> str:
    """Rewrite a /blob/ file URL into its /raw/ counterpart.

    The first two path segments are the namespace and the project, so the
    blob marker is only searched from the third segment on. Only YAML files
    are accepted.
    """
    try:
        url = _parse_absolute(target)
        segments = [segment for segment in url.path.split("/") if segment]

        try:
            blob_index = segments.index("blob", 2)
        except ValueError:
            blob_index = -1

        if blob_index < 2 or blob_index == len(segments) - 1:
            raise ValueError("Wrong GitLab URL")

        repo_path = segments[:blob_index]
        rest_of_path = segments[blob_index + 1:]

        if not _YAML_SUFFIX.search("/".join(rest_of_path)):
            raise ValueError("Wrong GitLab URL")

        path = "/" + "/".join([*repo_path, "raw", *rest_of_path])
        return urlunsplit((url.scheme, _netloc(url), _encode_path(path), url.query, url.fragment))
    except ValueError as exc:
        raise InvalidUrlError(f"Incorrect url: {target}, {exc}") from exc


def build_project_url(target: str, project_id: int | float, settings: Settings) -> str:
    """Build the repository files API URL returning the raw file content.

    The file path is decoded once and then encoded as a single path segment,
    so nested directories show up as %2F. The ref is used verbatim.
    """
    try:
        url = _parse_absolute(target)

        parts = url.path.split(NESTED_BLOB_MARKER)
        if len(parts) < 2:
            raise ValueError(f"path does not contain {NESTED_BLOB_MARKER}")

        branch, *file_path = parts[1].split("/")
        relative_path = get_relative_path(settings)

        segments = [relative_path] if relative_path else []
        segments += [
            "api/v4/projects",
            _format_project_id(project_id),
            "repository/files",
            _encode_component(_decode_component("/".join(file_path))),
            "raw",
        ]
        path = "/".join(segments)
        if not path.startswith("/"):
            path = "/" + path

        return urlunsplit((url.scheme, _netloc(url), _encode_path(path), f"ref={branch}", url.fragment))
    except ValueError as exc:
        raise InvalidUrlError(f"Incorrect url: {target}, {exc}") from exc


async def get_project_id(
    target: str,
    settings: Settings,
    http: httpx.AsyncClient | None = None,
) -> int | float:
    """Resolve the numeric project ID of a nested-group file URL.

    The repository path in front of /-/blob/ is looked up through
    GET /api/v4/projects/<url-encoded path>. The ``id`` field of the answer
    is converted to a number without further checks: a missing or
    non-numeric ``id`` gives NaN.

    Raises:
        InvalidUrlError: The URL cannot be parsed.
        NestedGroupUrlRequiredError: The URL does not contain /-/blob/.
        ProjectIdLookupError: The lookup failed for any reason.
    """
    try:
        url = _parse_absolute(target)
    except ValueError as exc:
        raise InvalidUrlError(f"Incorrect url: {target}, {exc}") from exc

    if NESTED_BLOB_MARKER not in url.path:
        raise NestedGroupUrlRequiredError()

    try:
        repo = url.path.split(NESTED_BLOB_MARKER)[0]

        relative_path = get_relative_path(settings)
        # Not anchored: the first occurrence is removed wherever it is
        if relative_path:
            repo = repo.replace(relative_path, "", 1)

        if repo.startswith("/"):
            repo = repo[1:]

        lookup_url = f"{_origin(url)}{relative_path}/api/v4/projects/{_encode_component(repo)}"
        logger.debug("Looking up GitLab project ID: %s", lookup_url)

        options = get_request_options(settings)
        if http is None:
            async with httpx.AsyncClient() as owned:
                response = await owned.get(lookup_url, **options)
        else:
            response = await http.get(lookup_url, **options)

        data = response.json()
        body = data if isinstance(data, dict) else {}

        if not response.is_success:
            raise GitLabAPIError(
                f"'{body.get('error')}', {body.get('error_description')}",
                response.status_code,
            )

        return _to_number(body.get("id", _MISSING))
    except Exception as exc:
        logger.warning("Project ID lookup failed for %s: %s", target, exc)
        raise ProjectIdLookupError(target, exc) from exc


def _parse_absolute(target: str) -> SplitResult:
    url = urlsplit(target)
    if not url.scheme or not url.netloc:
        raise ValueError("Invalid URL")
    return url


def _host(url: SplitResult) -> str:
    """Serialize host and port, leaving out the scheme's default port."""
    host = url.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = url.port
    if port is not None and port != _DEFAULT_PORTS.get(url.scheme):
        host = f"{host}:{port}"
    return host


def _netloc(url: SplitResult) -> str:
    userinfo, at, _ = url.netloc.rpartition("@")
    return f"{userinfo}{at}{_host(url)}"


def _origin(url: SplitResult) -> str:
    # Credentials are not part of the origin
    return f"{url.scheme}://{_host(url)}"


def _encode_path(path: str) -> str:
    return quote(path, safe=_PATH_SAFE)


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _decode_component(value: str) -> str:
    """Decode percent-escapes, failing like decodeURIComponent on bad input."""
    if _MALFORMED_ESCAPE.search(value):
        raise ValueError(f"URI malformed: {value}")
    return unquote(value, errors="strict")


def _to_number(value: Any) -> int | float:
    """Convert a JSON value to a number the way JavaScript's Number() does.

    Missing values and anything non-numeric become NaN, null becomes 0.
    """
    if value is _MISSING:
        return math.nan
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if not _JS_NUMBER.fullmatch(text):
            return math.nan
        return _to_number(float(text))
    return math.nan


def _format_project_id(project_id: int | float) -> str:
    if isinstance(project_id, float):
        if math.isnan(project_id):
            return "NaN"
        if math.isinf(project_id):
            return "Infinity" if project_id > 0 else "-Infinity"
        if project_id.is_integer():
            return str(int(project_id))
    return str(project_id)
