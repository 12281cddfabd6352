"""Source acquisition layer - git clones and release assets in a shared workspace."""

from repocache.sources.credentials import resolve_credentials
from repocache.sources.git_operations import GitOperations
from repocache.sources.github import GitHubClient
from repocache.sources.manager import RepositoryManager
from repocache.sources.paths import derive_workspace_path
from repocache.sources.releases import GitHubRelease, ReleaseFetcher
from repocache.sources.repository import GitRepository, Repository
from repocache.sources.synchronizer import FetchSynchronizer

__all__ = [
    "RepositoryManager",
    "Repository",
    "GitRepository",
    "GitHubRelease",
    "ReleaseFetcher",
    "GitHubClient",
    "GitOperations",
    "FetchSynchronizer",
    "derive_workspace_path",
    "resolve_credentials",
]
