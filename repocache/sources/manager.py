"""Repository manager - unified entry point for cached source artifacts."""

import shutil
from pathlib import Path
from typing import Any

from git import Repo

from repocache.core.config.settings import Settings, get_settings
from repocache.core.exceptions.errors import FilesystemError
from repocache.core.logger.logger import get_logger
from repocache.models.credentials import AuthMethod
from repocache.models.repository import CloneOptions
from repocache.sources.credentials import resolve_credentials
from repocache.sources.git_operations import GitOperations
from repocache.sources.paths import derive_workspace_path
from repocache.sources.releases import GitHubRelease, ReleaseFetcher
from repocache.sources.repository import GitRepository
from repocache.sources.synchronizer import FetchSynchronizer

logger = get_logger(__name__)


class RepositoryManager:
    """Fetches git repositories and release assets into a shared workspace.

    Git fetches are serialized on one workspace-wide lock. A cache entry whose
    directory exists is assumed to be a complete clone and is opened as-is.
    """

    def __init__(
        self,
        workspace: Path | str | None = None,
        git_operations: GitOperations | None = None,
        synchronizer: FetchSynchronizer | None = None,
        release_fetcher: ReleaseFetcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the repository manager.

        Args:
            workspace: Workspace root. Defaults to the configured root.
            git_operations: Git transport instance.
            synchronizer: Workspace lock shared with returned handles.
            release_fetcher: Release fetcher instance.
            settings: Settings to use instead of the global ones.

        Raises:
            FilesystemError: If the workspace root cannot be created.
        """
        self.settings = settings or get_settings()
        self.workspace = Path(workspace) if workspace else self.settings.workspace.root

        try:
            self.workspace.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Failed to create workspace directory: {self.workspace}",
                path=str(self.workspace),
                details={"error": str(e)},
            ) from e

        self.git_operations = git_operations or GitOperations(
            verify_ssl=self.settings.git.verify_ssl,
            low_speed_limit=self.settings.git.low_speed_limit,
            low_speed_time=self.settings.git.low_speed_time,
        )
        self.synchronizer = synchronizer or FetchSynchronizer()
        self.release_fetcher = release_fetcher or ReleaseFetcher(
            self.workspace,
            releases_dir=self.settings.workspace.releases_dir,
            settings=self.settings,
        )

    def get_git_repository(
        self,
        repo_url: str,
        username: str | None = None,
        secret: str | None = None,
        private_key: str | None = None,
    ) -> GitRepository:
        """Return a handle on the cached clone of ``repo_url``.

        Clones on first request; later requests open the existing clone.

        Args:
            repo_url: Repository URL.
            username: Optional user name.
            secret: Password, or key passphrase when a key is given.
            private_key: Optional SSH private key material.

        Returns:
            GitRepository handle whose path exists on disk.

        Raises:
            CredentialError: If the credentials are incomplete.
            URLError: If no cache path can be derived from the URL.
            CloneOrOpenError: If the clone or open fails. The cache path is
                removed first.
            FilesystemError: If the cache path cannot be inspected.
        """
        auth = resolve_credentials(username, secret, private_key)

        with self.synchronizer.hold():
            path = derive_workspace_path(self.workspace, repo_url)
            exists = self._exists(path)
            try:
                repo = self._clone_or_open(repo_url, path, auth, exists)
            except Exception:
                self._remove_path(path)
                raise

        return GitRepository(path, repo, self.synchronizer, self.git_operations)

    def _clone_or_open(self, repo_url: str, path: Path, auth: AuthMethod, exists: bool) -> Repo:
        if exists:
            logger.debug(f"Cache hit for {repo_url}: {path}")
            return self.git_operations.open(path)

        options = CloneOptions(
            auth=auth,
            ref=self.settings.git.default_ref,
            recurse_submodules=self.settings.git.recurse_submodules,
        )
        return self.git_operations.clone(repo_url, path, options)

    def _exists(self, path: Path) -> bool:
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(
                f"Failed to inspect cache path: {path}",
                path=str(path),
                details={"error": str(e)},
            ) from e
        return True

    def _remove_path(self, path: Path) -> None:
        """Best-effort removal of a cache entry after a failed fetch."""
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path, ignore_errors=True)
            else:
                path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove {path} after fetch error: {e}")
            return

        if path.exists():
            logger.warning(f"Failed to fully remove {path} after fetch error")
        else:
            logger.debug(f"Removed {path} after fetch error")

    def get_github_release(
        self,
        owner: str,
        repo_name: str,
        asset_name: str,
        token: str | None = None,
    ) -> GitHubRelease:
        """Resolve a GitHub release asset to its workspace path.

        Does not take the workspace lock. The returned descriptor shares the
        fetcher's API client for its token; ``close()`` on the manager
        releases those clients.

        Raises:
            RemoteLookupError: If the repository lookup fails.
            FilesystemError: If the release directory cannot be created.
        """
        return self.release_fetcher.resolve_release(owner, repo_name, asset_name, token)

    def close(self) -> None:
        """Close the GitHub clients opened for release lookups."""
        self.release_fetcher.close()

    def __enter__(self) -> "RepositoryManager":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
