"""Git transport built on GitPython."""

import os
import shlex
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.exc import GitError as GitPythonError

from repocache.core.config.settings import get_settings
from repocache.core.exceptions.errors import CloneOrOpenError, VersionError
from repocache.core.logger.logger import get_logger
from repocache.models.credentials import AuthMethod, PasswordAuth, PublicKeyAuth
from repocache.models.repository import CloneOptions, VersionType

logger = get_logger(__name__)

ASKPASS_USERNAME_VAR = "REPOCACHE_ASKPASS_USERNAME"
ASKPASS_SECRET_VAR = "REPOCACHE_ASKPASS_SECRET"

# git and ssh call the helper with the prompt text as $1
_ASKPASS_SCRIPT = f"""#!/bin/sh
case "$1" in
    Username*|username*) printf '%s\\n' "${ASKPASS_USERNAME_VAR}" ;;
    *) printf '%s\\n' "${ASKPASS_SECRET_VAR}" ;;
esac
"""


class GitOperations:
    """Handles git clone, open and checkout operations."""

    def __init__(
        self,
        verify_ssl: bool | None = None,
        low_speed_limit: int | None = None,
        low_speed_time: int | None = None,
    ) -> None:
        """Initialize git operations.

        Args:
            verify_ssl: Whether to verify SSL certificates.
            low_speed_limit: Bytes/second below which a transfer is stalled.
            low_speed_time: Seconds a stalled transfer is tolerated.
        """
        settings = get_settings()

        self.verify_ssl = verify_ssl if verify_ssl is not None else settings.git.verify_ssl
        self.low_speed_limit = (
            low_speed_limit if low_speed_limit is not None else settings.git.low_speed_limit
        )
        self.low_speed_time = (
            low_speed_time if low_speed_time is not None else settings.git.low_speed_time
        )

    def _base_environment(self) -> dict[str, str]:
        env = {
            "GIT_TERMINAL_PROMPT": "0",
            "GIT_HTTP_LOW_SPEED_LIMIT": str(self.low_speed_limit),
            "GIT_HTTP_LOW_SPEED_TIME": str(self.low_speed_time),
        }
        if not self.verify_ssl:
            env["GIT_SSL_NO_VERIFY"] = "true"
        return env

    @contextmanager
    def _auth_environment(self, auth: AuthMethod) -> Generator[dict[str, str], None, None]:
        """Build the process environment that presents ``auth`` to the remote.

        Key material and the askpass helper live in a private temporary
        directory that is removed when the block exits.

        Args:
            auth: Resolved authentication method.

        Yields:
            Environment overrides for the git process.
        """
        env = self._base_environment()

        if not isinstance(auth, (PasswordAuth, PublicKeyAuth)):
            yield env
            return

        with tempfile.TemporaryDirectory(prefix="repocache-auth-") as tmp:
            askpass = Path(tmp) / "askpass.sh"
            askpass.write_text(_ASKPASS_SCRIPT, encoding="utf-8")
            askpass.chmod(0o700)

            env.update(
                {
                    "GIT_ASKPASS": str(askpass),
                    "SSH_ASKPASS": str(askpass),
                    "SSH_ASKPASS_REQUIRE": "force",
                    ASKPASS_USERNAME_VAR: auth.username,
                }
            )
            ssh_command = [
                "ssh",
                "-l",
                auth.username,
                "-o",
                "StrictHostKeyChecking=accept-new",
            ]

            if isinstance(auth, PublicKeyAuth):
                key_path = Path(tmp) / "id_key"
                key_material = auth.private_key.get_secret_value()
                if not key_material.endswith("\n"):
                    key_material += "\n"
                fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(key_material)
                ssh_command += ["-i", str(key_path), "-o", "IdentitiesOnly=yes"]
                env[ASKPASS_SECRET_VAR] = auth.passphrase.get_secret_value()
            else:
                env[ASKPASS_SECRET_VAR] = auth.password.get_secret_value()

            env["GIT_SSH_COMMAND"] = shlex.join(ssh_command)
            yield env

    def open(self, path: Path) -> Repo:
        """Open an existing git repository.

        Args:
            path: Path to the repository.

        Returns:
            Repo object.

        Raises:
            CloneOrOpenError: If the path is not a git repository.
        """
        try:
            return Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise CloneOrOpenError(
                f"Not a valid Git repository: {path}",
                path=str(path),
                details={"error": str(e)},
            ) from e

    def clone(self, repo_url: str, target_path: Path, options: CloneOptions | None = None) -> Repo:
        """Clone a git repository.

        Args:
            repo_url: URL of the repository to clone.
            target_path: Local path to clone into.
            options: Authentication, branch and submodule options.

        Returns:
            Cloned Repo object.

        Raises:
            CloneOrOpenError: If the clone fails.
        """
        options = options or CloneOptions()
        logger.info(f"Cloning repository: {repo_url}")

        clone_kwargs: dict[str, Any] = {}
        if options.ref:
            clone_kwargs["branch"] = options.ref
        if options.recurse_submodules:
            clone_kwargs["recurse_submodules"] = True

        try:
            with self._auth_environment(options.auth) as env:
                repo = Repo.clone_from(repo_url, str(target_path), env=env, **clone_kwargs)
        except GitPythonError as e:
            raise CloneOrOpenError(
                f"Failed to clone repository: {repo_url}",
                repo_url=repo_url,
                path=str(target_path),
                details={"error": str(e)},
            ) from e

        logger.info(f"Successfully cloned {repo_url} to {target_path}")
        return repo

    def _try_checkout(self, repo: Repo, *args: str, **kwargs: Any) -> bool:
        try:
            repo.git.checkout(*args, **kwargs)
        except GitCommandError:
            return False
        return True

    def checkout(
        self,
        repo: Repo,
        version: str,
        version_type: VersionType = VersionType.DEFAULT,
    ) -> None:
        """Switch the working copy to ``version``.

        The identifier is tried as a local branch, tag or commit first, then
        again after fetching from origin, then as the remote branch
        ``origin/<version>``.

        Args:
            repo: Repo object.
            version: Branch, tag or commit identifier.
            version_type: Discriminator for the identifier.

        Raises:
            VersionError: If the identifier does not resolve.
        """
        logger.info(f"Checking out {version_type.value}: {version}")

        if self._try_checkout(repo, version, "--"):
            logger.info(f"Successfully checked out {version}")
            return

        try:
            repo.git.fetch("origin", "--tags")
        except GitCommandError as e:
            raise VersionError(
                f"Version not found: {version}",
                version=version,
                version_type=version_type.value,
                details={"error": str(e)},
            ) from e

        if self._try_checkout(repo, version, "--"):
            logger.info(f"Successfully checked out {version}")
            return

        remote_branch = f"origin/{version}"
        if remote_branch in [ref.name for ref in repo.remote("origin").refs]:
            if self._try_checkout(repo, remote_branch, "--", b=version):
                logger.info(f"Successfully checked out {remote_branch} as {version}")
                return

        raise VersionError(
            f"Version not found: {version}",
            version=version,
            version_type=version_type.value,
        )

    def current_ref(self, repo: Repo) -> str:
        """Get the current branch name, or the short commit sha when detached.

        Args:
            repo: Repo object.

        Returns:
            Current reference name.
        """
        if repo.head.is_detached:
            return repo.head.commit.hexsha[:8]
        return repo.active_branch.name
