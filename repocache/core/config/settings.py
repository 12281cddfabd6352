"""Application settings using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repocache.core.config.loader import ConfigLoader

DEFAULT_CONFIG_PATHS = [
    Path("repocache.local.yaml"),
    Path("repocache.yaml"),
    Path.home() / ".repocache" / "config.yaml",
]


class WorkspaceSettings(BaseSettings):
    """Workspace configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCACHE_WORKSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path = Field(
        default_factory=lambda: Path.home() / ".cache" / "repocache",
        description="Root directory holding every cached artifact",
    )
    releases_dir: str = Field(
        default="releases",
        min_length=1,
        description="Sub-directory of the root used for release archives",
    )

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: str | Path) -> Path:
        """Expand user home in the workspace root."""
        return Path(v).expanduser()


class GitSettings(BaseSettings):
    """Git transport configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCACHE_GIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_ref: str | None = Field(
        default=None,
        description="Branch cloned by default (None = remote HEAD)",
    )
    recurse_submodules: bool = Field(
        default=True,
        description="Clone submodules recursively",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify SSL certificates",
    )
    low_speed_limit: int = Field(
        default=1000,
        ge=0,
        description="Bytes/second below which a transfer counts as stalled",
    )
    low_speed_time: int = Field(
        default=300,
        ge=10,
        le=3600,
        description="Seconds a transfer may stay stalled before git aborts it",
    )

    @field_validator("default_ref", mode="before")
    @classmethod
    def validate_default_ref(cls, v: str | None) -> str | None:
        """Treat an empty ref as unset."""
        if v is None or v == "":
            return None
        return v


class GitHubSettings(BaseSettings):
    """GitHub API configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCACHE_GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCACHE_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPOCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    workspace: WorkspaceSettings = Field(default_factory=WorkspaceSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            workspace=WorkspaceSettings(**loader.get_section("workspace")),
            git=GitSettings(**loader.get_section("git")),
            github=GitHubSettings(**loader.get_section("github")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from default locations.

        Priority: REPOCACHE_CONFIG file > first default YAML found > environment
        variables and .env > defaults.

        Returns:
            Settings instance.
        """
        explicit = os.environ.get("REPOCACHE_CONFIG")
        if explicit:
            return cls.from_yaml(Path(explicit))

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return cls.from_yaml(default_path)

        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
