"""Tests for ReleaseFetcher and GitHubRelease."""

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from repocache.core.config.settings import GitHubSettings, Settings, WorkspaceSettings
from repocache.core.exceptions.errors import FilesystemError, RemoteLookupError, VersionError
from repocache.models.release import ReleaseInfo
from repocache.sources.github import GitHubClient
from repocache.sources.releases import GitHubRelease, ReleaseFetcher
from repocache.sources.repository import Repository

RELEASE_PAYLOAD = {
    "tag_name": "v1.0.0",
    "assets": [{"name": "widgets-v1.tar.gz", "size": 10}],
}


def github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub API knowing acme/widgets and its v1.0.0 release."""
    path = request.url.path
    if path == "/repos/acme/widgets":
        return httpx.Response(200, json={"full_name": "acme/widgets"})
    if path == "/repos/acme/widgets/releases/tags/v1.0.0":
        return httpx.Response(200, json=RELEASE_PAYLOAD)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def tokens() -> list[str | None]:
    """Tokens passed to the client factory."""
    return []


@pytest.fixture
def fetcher(workspace: Path, tokens: list[str | None]) -> ReleaseFetcher:
    """Release fetcher backed by the fake GitHub API."""

    def factory(token: str | None) -> GitHubClient:
        tokens.append(token)
        return GitHubClient(
            token=token,
            api_url="https://api.github.test",
            transport=httpx.MockTransport(github_handler),
        )

    return ReleaseFetcher(workspace, client_factory=factory, releases_dir="releases")


class TestResolveRelease:
    """Tests for ReleaseFetcher.resolve_release."""

    def test_existing_repository_reserves_directory(
        self, fetcher: ReleaseFetcher, workspace: Path, tokens: list[str | None]
    ) -> None:
        """The documented scenario creates releases/<owner>/<repo>."""
        release = fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz", None)

        directory = workspace / "releases" / "acme" / "widgets"
        assert directory.is_dir()
        assert release.directory == directory
        assert release.archive_path == directory / "widgets-v1.tar.gz"
        assert release.get_path() == release.archive_path
        assert not release.archive_path.exists()
        assert tokens == [None]
        assert isinstance(release, Repository)

    def test_token_is_forwarded_to_client(
        self, fetcher: ReleaseFetcher, tokens: list[str | None]
    ) -> None:
        """A token builds an authenticated client."""
        fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz", token="ghp_x")
        assert tokens == ["ghp_x"]

    def test_existing_directory_is_not_an_error(
        self, fetcher: ReleaseFetcher, workspace: Path
    ) -> None:
        """Resolving twice returns the same archive path."""
        first = fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz")
        second = fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz")

        assert first.archive_path == second.archive_path

    def test_missing_repository_creates_nothing(
        self, fetcher: ReleaseFetcher, workspace: Path
    ) -> None:
        """A failed lookup leaves no local state behind."""
        with pytest.raises(RemoteLookupError, match="not found") as exc_info:
            fetcher.resolve_release("acme", "gadgets", "gadgets.zip")

        assert exc_info.value.status_code == 404
        assert not (workspace / "releases").exists()

    def test_lookup_failure_keeps_client_for_reuse(self, workspace: Path) -> None:
        """A failed lookup leaves the shared client cached until close()."""
        client = MagicMock(spec=GitHubClient)
        client.get_repository.side_effect = RemoteLookupError("boom")
        factory = MagicMock(return_value=client)
        fetcher = ReleaseFetcher(workspace, client_factory=factory)

        for _ in range(2):
            with pytest.raises(RemoteLookupError):
                fetcher.resolve_release("acme", "widgets", "widgets.zip")

        factory.assert_called_once_with(None)
        client.close.assert_not_called()
        fetcher.close()
        client.close.assert_called_once()

    def test_directory_creation_failure(self, temp_dir: Path) -> None:
        """mkdir failures surface as FilesystemError."""
        blocker = temp_dir / "blocker"
        blocker.write_text("file in the way")
        client = MagicMock(spec=GitHubClient)
        fetcher = ReleaseFetcher(blocker, client_factory=lambda token: client)

        with pytest.raises(FilesystemError, match="Failed to create release directory"):
            fetcher.resolve_release("acme", "widgets", "widgets.zip")


class TestClientSharing:
    """Tests for the per-token GitHub clients."""

    def test_one_client_per_token(self, fetcher: ReleaseFetcher, tokens: list[str | None]) -> None:
        """Descriptors resolved with the same token share one client."""
        fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz")
        fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz")
        fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz", token="ghp_x")
        fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz", token="ghp_x")

        assert tokens == [None, "ghp_x"]

    def test_close_closes_every_client(self, workspace: Path) -> None:
        """Closing the fetcher closes each client once."""
        clients: list[MagicMock] = []

        def factory(token: str | None) -> MagicMock:
            clients.append(MagicMock(spec=GitHubClient))
            return clients[-1]

        with ReleaseFetcher(workspace, client_factory=factory) as fetcher:
            fetcher.resolve_release("acme", "widgets", "a.zip")
            fetcher.resolve_release("acme", "widgets", "a.zip", token="t")

        assert len(clients) == 2
        for client in clients:
            client.close.assert_called_once()

    def test_default_client_uses_given_settings(self, workspace: Path) -> None:
        """Without a factory the client is built from the fetcher's settings."""
        settings = Settings(
            workspace=WorkspaceSettings(root=workspace),
            github=GitHubSettings(api_url="https://ghe.example.test/api/v3/", timeout=7),
        )
        fetcher = ReleaseFetcher(workspace, settings=settings)

        client = fetcher._client_for("ghp_x")

        assert client.api_url == "https://ghe.example.test/api/v3"
        assert client.token == "ghp_x"
        assert client._client.timeout.read == 7
        fetcher.close()


class TestGitHubReleaseSetVersion:
    """Tests for selecting a release version."""

    @pytest.fixture
    def release(self, fetcher: ReleaseFetcher) -> GitHubRelease:
        return fetcher.resolve_release("acme", "widgets", "widgets-v1.tar.gz")

    def test_known_tag_with_asset(self, release: GitHubRelease) -> None:
        """A tag publishing the asset is selected."""
        release.set_version("v1.0.0")

        assert release.release is not None
        assert release.release.tag_name == "v1.0.0"

    def test_unknown_tag_raises_version_error(self, release: GitHubRelease) -> None:
        """A missing release raises VersionError."""
        with pytest.raises(VersionError, match="Release not found") as exc_info:
            release.set_version("v9.9.9")

        assert isinstance(exc_info.value.__cause__, RemoteLookupError)
        assert release.release is None

    def test_release_without_asset_raises_version_error(self, workspace: Path) -> None:
        """A release lacking the requested asset raises VersionError."""
        client = MagicMock(spec=GitHubClient)
        client.get_repository.return_value = {}
        client.get_release_by_tag.return_value = ReleaseInfo.from_api(RELEASE_PAYLOAD)
        fetcher = ReleaseFetcher(workspace, client_factory=lambda token: client)
        release = fetcher.resolve_release("acme", "widgets", "other.zip")

        with pytest.raises(VersionError, match="has no asset named other.zip"):
            release.set_version("v1.0.0")
