"""repocache - local cache for git repositories and GitHub release assets."""

__version__ = "0.1.0"

from repocache.sources import (  # noqa: E402
    GitHubRelease,
    GitRepository,
    Repository,
    RepositoryManager,
)

__all__ = [
    "__version__",
    "RepositoryManager",
    "Repository",
    "GitRepository",
    "GitHubRelease",
]
