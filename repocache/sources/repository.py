"""Repository handle abstraction and its git-backed implementation."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from git import Repo

from repocache.models.repository import VersionType
from repocache.sources.git_operations import GitOperations
from repocache.sources.synchronizer import FetchSynchronizer


@runtime_checkable
class Repository(Protocol):
    """A located, version-switchable artifact."""

    def get_path(self) -> Path:
        """Return the local path of the artifact."""
        ...

    def set_version(
        self,
        version: str,
        version_type: VersionType = VersionType.DEFAULT,
    ) -> None:
        """Switch the artifact to ``version``.

        Raises:
            VersionError: If the version cannot be resolved.
        """
        ...


class GitRepository:
    """Handle on a cached git working copy.

    The synchronizer is borrowed from the manager that produced the handle;
    version switches take the same workspace lock as clones.
    """

    def __init__(
        self,
        path: Path,
        repo: Repo,
        synchronizer: FetchSynchronizer,
        git_operations: GitOperations,
    ) -> None:
        self._path = path
        self._repo = repo
        self._synchronizer = synchronizer
        self._git_operations = git_operations

    @property
    def repo(self) -> Repo:
        """Return the underlying GitPython repository."""
        return self._repo

    def get_path(self) -> Path:
        return self._path

    def set_version(
        self,
        version: str,
        version_type: VersionType = VersionType.DEFAULT,
    ) -> None:
        """Check out ``version`` in the working copy.

        Args:
            version: Branch, tag or commit identifier.
            version_type: Discriminator forwarded to the transport.

        Raises:
            VersionError: If the identifier does not resolve.
        """
        with self._synchronizer.hold():
            self._git_operations.checkout(self._repo, version, version_type)

    def current_version(self) -> str:
        """Return the checked-out branch name, or a short sha when detached."""
        with self._synchronizer.hold():
            return self._git_operations.current_ref(self._repo)

    def __repr__(self) -> str:
        return f"GitRepository(path={str(self._path)!r})"
