"""Exception definitions module."""

from repocache.core.exceptions.errors import (
    CloneOrOpenError,
    ConfigurationError,
    CredentialError,
    FilesystemError,
    RemoteLookupError,
    RepoCacheError,
    URLError,
    VersionError,
)

__all__ = [
    "RepoCacheError",
    "URLError",
    "CredentialError",
    "RemoteLookupError",
    "CloneOrOpenError",
    "VersionError",
    "FilesystemError",
    "ConfigurationError",
]
