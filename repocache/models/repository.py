"""Repository-related data models."""

from enum import Enum

from pydantic import BaseModel, Field

from repocache.models.credentials import AuthMethod, NoAuth


class VersionType(str, Enum):
    """Discriminator forwarded with a version identifier.

    Only the unspecified variant exists; transports decide how to resolve it.
    """

    DEFAULT = "default"


class CloneOptions(BaseModel):
    """Options passed to the git transport for a clone."""

    auth: AuthMethod = Field(
        default_factory=NoAuth,
        description="Authentication method for the remote",
    )
    ref: str | None = Field(
        default=None,
        description="Branch to clone (None = remote HEAD)",
    )
    recurse_submodules: bool = Field(
        default=True,
        description="Clone submodules recursively",
    )
