"""Authentication method models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, SecretStr


class AuthKind(str, Enum):
    """Authentication strategy enumeration."""

    NONE = "none"
    PASSWORD = "password"
    PUBLIC_KEY = "public_key"


class NoAuth(BaseModel):
    """Unauthenticated access."""

    kind: Literal[AuthKind.NONE] = AuthKind.NONE

    model_config = {"frozen": True}


class PasswordAuth(BaseModel):
    """Username/password authentication."""

    kind: Literal[AuthKind.PASSWORD] = AuthKind.PASSWORD
    username: str = Field(description="User name presented to the remote")
    password: SecretStr = Field(description="Password or access token")

    model_config = {"frozen": True}


class PublicKeyAuth(BaseModel):
    """SSH private key authentication."""

    kind: Literal[AuthKind.PUBLIC_KEY] = AuthKind.PUBLIC_KEY
    username: str = Field(description="User name presented to the SSH server")
    private_key: SecretStr = Field(description="PEM or OpenSSH private key material")
    passphrase: SecretStr = Field(
        default=SecretStr(""),
        description="Passphrase protecting the private key (empty = none)",
    )

    model_config = {"frozen": True}


AuthMethod = NoAuth | PasswordAuth | PublicKeyAuth
