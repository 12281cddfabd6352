"""Custom exception definitions for repocache."""

from typing import Any


class RepoCacheError(Exception):
    """Base exception for all repocache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class URLError(RepoCacheError):
    """Exception raised when a source URL cannot be turned into a cache path."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)


class CredentialError(RepoCacheError):
    """Exception raised for incomplete or unusable credentials."""

    def __init__(
        self,
        message: str,
        username: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if username:
            details["username"] = username
        super().__init__(message, details)


class RemoteLookupError(RepoCacheError):
    """Exception raised when remote metadata cannot be fetched."""

    def __init__(
        self,
        message: str,
        owner: str | None = None,
        repo_name: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize remote lookup error.

        Args:
            message: Error message.
            owner: Repository owner involved in the lookup.
            repo_name: Repository name involved in the lookup.
            status_code: HTTP status code, if a response was received.
            details: Additional error details.
        """
        details = details or {}
        if owner:
            details["owner"] = owner
        if repo_name:
            details["repo_name"] = repo_name
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class CloneOrOpenError(RepoCacheError):
    """Exception raised when a repository cannot be cloned or opened."""

    def __init__(
        self,
        message: str,
        repo_url: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize clone/open error.

        Args:
            message: Error message.
            repo_url: Repository URL that caused the error.
            path: Local path involved.
            details: Additional error details.
        """
        details = details or {}
        if repo_url:
            details["repo_url"] = repo_url
        if path:
            details["path"] = path
        super().__init__(message, details)


class VersionError(RepoCacheError):
    """Exception raised when a version cannot be resolved."""

    def __init__(
        self,
        message: str,
        version: str | None = None,
        version_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if version:
            details["version"] = version
        if version_type:
            details["version_type"] = version_type
        super().__init__(message, details)


class FilesystemError(RepoCacheError):
    """Exception raised for stat/mkdir/remove failures in the workspace."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class ConfigurationError(RepoCacheError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
