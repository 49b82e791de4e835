"""GitLab HTTP client that resolves file URLs and reads raw file content."""

import logging

import httpx

from gitlab_file_url.config import Settings
from gitlab_file_url.core import get_file_fetch_url, get_request_options
from gitlab_file_url.exceptions import (
    AuthenticationError,
    GitLabAPIError,
    NotFoundError,
)


logger = logging.getLogger("gitlab_file_url")


class GitLabClient:
    """Async HTTP client for reading files from a GitLab instance.

    Owns a single httpx.AsyncClient shared by project ID lookups and file
    downloads. Failed requests are not retried.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: httpx.AsyncClient | None = None

    def _build_headers(self) -> dict[str, str]:
        """Build HTTP headers, including the PRIVATE-TOKEN header."""
        headers = {
            "User-Agent": "gitlab-file-url/0.1.0",
        }
        headers.update(get_request_options(self.settings)["headers"])
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._build_headers(),
                timeout=httpx.Timeout(self.settings.timeout),
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def resolve_fetch_url(self, url: str) -> str:
        """Translate a file URL into a URL returning the raw file content."""
        client = await self._get_client()
        return await get_file_fetch_url(url, self.settings, client)

    async def read_file(self, url: str) -> tuple[str, str]:
        """Read the raw content of the file a GitLab URL points to.

        Returns:
            Tuple of the fetch URL that was used and the file content.

        Raises:
            AuthenticationError: On 401 responses.
            NotFoundError: On 404 responses.
            GitLabAPIError: On other error responses.
        """
        fetch_url = await self.resolve_fetch_url(url)
        client = await self._get_client()

        logger.debug("Reading %s from %s", url, fetch_url)
        response = await client.get(fetch_url, **get_request_options(self.settings))

        if response.is_success:
            return fetch_url, response.text

        if response.status_code == 401:
            raise AuthenticationError()

        if response.status_code == 404:
            raise NotFoundError(url)

        try:
            error_body = response.json()
            error_msg = error_body.get("message", error_body.get("error", str(error_body)))
        except Exception:
            error_msg = response.text[:500]

        raise GitLabAPIError(str(error_msg), response.status_code)
