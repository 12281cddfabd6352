"""GitHub REST API client used for release lookups.

API Documentation: https://docs.github.com/en/rest/repos
"""

from typing import Any

import httpx

from repocache import __version__
from repocache.core.config.settings import get_settings
from repocache.core.exceptions.errors import RemoteLookupError
from repocache.core.logger.logger import get_logger
from repocache.models.release import ReleaseInfo

logger = get_logger(__name__)


class GitHubClient:
    """Synchronous client for the repository and release endpoints.

    Anonymous unless a token is given; anonymous clients are subject to the
    lower unauthenticated rate limit.
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: Personal access token sent as a bearer token.
            api_url: API base URL. Defaults to the configured GitHub API.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        settings = get_settings()

        self.token = token
        self.api_url = (api_url or settings.github.api_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            headers=self._get_headers(),
            timeout=timeout or settings.github.timeout,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Get request headers."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"repocache/{__version__}",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, url: str, owner: str, repo_name: str, what: str) -> dict[str, Any]:
        logger.debug(f"Request: GET {self.api_url}{url}")

        try:
            response = self._client.get(url)
        except httpx.RequestError as e:
            raise RemoteLookupError(
                f"Failed to reach GitHub while looking up {what}: {owner}/{repo_name}",
                owner=owner,
                repo_name=repo_name,
                details={"error": str(e)},
            ) from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                message = f"GitHub {what} not found: {owner}/{repo_name}"
            elif status in (401, 403):
                message = f"Access denied to GitHub {what}: {owner}/{repo_name}"
            else:
                message = f"GitHub {what} lookup failed with HTTP {status}: {owner}/{repo_name}"
            raise RemoteLookupError(
                message,
                owner=owner,
                repo_name=repo_name,
                status_code=status,
            ) from e

        return response.json()

    def get_repository(self, owner: str, repo_name: str) -> dict[str, Any]:
        """Fetch repository metadata.

        Args:
            owner: Repository owner (user or organization).
            repo_name: Repository name.

        Returns:
            Decoded repository payload.

        Raises:
            RemoteLookupError: If the repository is missing or unreachable.
        """
        return self._get(f"/repos/{owner}/{repo_name}", owner, repo_name, "repository")

    def get_release_by_tag(self, owner: str, repo_name: str, tag: str) -> ReleaseInfo:
        """Fetch the release published for ``tag``.

        Raises:
            RemoteLookupError: If the release is missing or unreachable.
        """
        data = self._get(
            f"/repos/{owner}/{repo_name}/releases/tags/{tag}",
            owner,
            repo_name,
            f"release {tag}",
        )
        return ReleaseInfo.from_api(data)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
