"""Resolution of GitHub release assets into workspace paths."""

import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from repocache.core.config.settings import Settings, get_settings
from repocache.core.exceptions.errors import FilesystemError, RemoteLookupError, VersionError
from repocache.core.logger.logger import get_logger
from repocache.models.release import ReleaseInfo
from repocache.models.repository import VersionType
from repocache.sources.github import GitHubClient

logger = get_logger(__name__)

ClientFactory = Callable[[str | None], GitHubClient]


class GitHubRelease:
    """Descriptor for a release asset reserved in the workspace.

    Only the containing directory is created; the archive itself is written
    by whoever downloads it. The API client belongs to the ReleaseFetcher
    that built the descriptor, so descriptors can be dropped without closing.
    """

    def __init__(
        self,
        owner: str,
        repo_name: str,
        asset_name: str,
        directory: Path,
        client: GitHubClient,
    ) -> None:
        self.owner = owner
        self.repo_name = repo_name
        self.asset_name = asset_name
        self.directory = directory
        self.archive_path = directory / asset_name
        self.release: ReleaseInfo | None = None
        self._client = client

    def get_path(self) -> Path:
        return self.archive_path

    def set_version(
        self,
        version: str,
        version_type: VersionType = VersionType.DEFAULT,
    ) -> None:
        """Select the release tagged ``version``.

        The release must exist and publish an asset named ``asset_name``.

        Args:
            version: Release tag.
            version_type: Discriminator, forwarded for symmetry with git handles.

        Raises:
            VersionError: If the release or its asset cannot be found.
        """
        try:
            release = self._client.get_release_by_tag(self.owner, self.repo_name, version)
        except RemoteLookupError as e:
            raise VersionError(
                f"Release not found: {self.owner}/{self.repo_name}@{version}",
                version=version,
                version_type=version_type.value,
                details={"error": str(e)},
            ) from e

        if release.find_asset(self.asset_name) is None:
            raise VersionError(
                f"Release {version} of {self.owner}/{self.repo_name} "
                f"has no asset named {self.asset_name}",
                version=version,
                version_type=version_type.value,
                details={"assets": [asset.name for asset in release.assets]},
            )

        self.release = release
        logger.info(f"Selected release {version} of {self.owner}/{self.repo_name}")

    def __repr__(self) -> str:
        return (
            f"GitHubRelease(owner={self.owner!r}, repo_name={self.repo_name!r}, "
            f"archive_path={str(self.archive_path)!r})"
        )


class ReleaseFetcher:
    """Resolves owner/repo/asset triples into release descriptors.

    One GitHub client is kept per token and shared by every descriptor built
    with it. ``close()`` releases them all.
    """

    def __init__(
        self,
        workspace: Path,
        client_factory: ClientFactory | None = None,
        releases_dir: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the release fetcher.

        Args:
            workspace: Workspace root directory.
            client_factory: Builds a GitHub client from an optional token.
            releases_dir: Sub-directory of the workspace holding releases.
            settings: Settings to use instead of the global ones.
        """
        self.settings = settings or get_settings()
        self.workspace = Path(workspace)
        self.client_factory: ClientFactory = client_factory or self._default_client
        self.releases_dir = releases_dir or self.settings.workspace.releases_dir
        self._clients: dict[str | None, GitHubClient] = {}
        self._clients_lock = threading.Lock()

    def _default_client(self, token: str | None) -> GitHubClient:
        return GitHubClient(
            token=token,
            api_url=self.settings.github.api_url,
            timeout=self.settings.github.timeout,
        )

    def _client_for(self, token: str | None) -> GitHubClient:
        with self._clients_lock:
            client = self._clients.get(token)
            if client is None:
                client = self.client_factory(token)
                self._clients[token] = client
            return client

    def release_directory(self, owner: str, repo_name: str) -> Path:
        """Return the directory reserved for releases of ``owner/repo_name``."""
        return self.workspace / self.releases_dir / owner / repo_name

    def resolve_release(
        self,
        owner: str,
        repo_name: str,
        asset_name: str,
        token: str | None = None,
    ) -> GitHubRelease:
        """Check that a repository exists and reserve storage for its asset.

        Args:
            owner: Repository owner.
            repo_name: Repository name.
            asset_name: Archive/asset file name.
            token: Optional API token. Anonymous access without it.

        Returns:
            GitHubRelease descriptor.

        Raises:
            RemoteLookupError: If the repository lookup fails. Nothing is
                created locally in that case.
            FilesystemError: If the release directory cannot be created.
        """
        client = self._client_for(token)
        client.get_repository(owner, repo_name)

        directory = self.release_directory(owner, repo_name)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Failed to create release directory: {directory}",
                path=str(directory),
                details={"error": str(e)},
            ) from e

        logger.info(f"Resolved release storage for {owner}/{repo_name}: {directory}")
        return GitHubRelease(
            owner=owner,
            repo_name=repo_name,
            asset_name=asset_name,
            directory=directory,
            client=client,
        )

    def close(self) -> None:
        """Close every GitHub client opened by this fetcher."""
        with self._clients_lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.close()

    def __enter__(self) -> "ReleaseFetcher":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
