"""Configuration module."""

from repocache.core.config.loader import ConfigLoader
from repocache.core.config.settings import (
    GitHubSettings,
    GitSettings,
    LoggingSettings,
    Settings,
    WorkspaceSettings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "Settings",
    "WorkspaceSettings",
    "GitSettings",
    "GitHubSettings",
    "LoggingSettings",
    "get_settings",
]
