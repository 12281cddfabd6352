"""Data models module."""

from repocache.models.credentials import (
    AuthKind,
    AuthMethod,
    NoAuth,
    PasswordAuth,
    PublicKeyAuth,
)
from repocache.models.release import ReleaseAsset, ReleaseInfo
from repocache.models.repository import CloneOptions, VersionType

__all__ = [
    "AuthKind",
    "AuthMethod",
    "NoAuth",
    "PasswordAuth",
    "PublicKeyAuth",
    "CloneOptions",
    "VersionType",
    "ReleaseAsset",
    "ReleaseInfo",
]
