"""Credential resolution for protected git remotes."""

import re

from repocache.core.exceptions.errors import CredentialError
from repocache.core.logger.logger import get_logger
from repocache.models.credentials import AuthMethod, NoAuth, PasswordAuth, PublicKeyAuth

logger = get_logger(__name__)

_PRIVATE_KEY_ARMOR = re.compile(r"-----BEGIN (?:[A-Z0-9]+ )*PRIVATE KEY-----")


def resolve_credentials(
    username: str | None = None,
    secret: str | None = None,
    private_key: str | None = None,
) -> AuthMethod:
    """Select an authentication method from optional credential inputs.

    Only ``None`` counts as absent; an empty string is a provided value.

    Args:
        username: User name. Without it the remote is accessed anonymously.
        secret: Password, or the key passphrase when a private key is given.
        private_key: SSH private key material.

    Returns:
        NoAuth, PasswordAuth or PublicKeyAuth.

    Raises:
        CredentialError: If a username is given without a secret or key, or
            the key material is not a private key.
    """
    if username is None:
        return NoAuth()

    if private_key is not None:
        if not _PRIVATE_KEY_ARMOR.search(private_key):
            raise CredentialError(
                f"private key for user '{username}' is not a PEM or OpenSSH private key",
                username=username,
            )
        logger.debug(f"Using public key authentication for user '{username}'")
        return PublicKeyAuth(
            username=username,
            private_key=private_key,
            passphrase=secret or "",
        )

    if secret is not None:
        logger.debug(f"Using password authentication for user '{username}'")
        return PasswordAuth(username=username, password=secret)

    raise CredentialError(
        f"authentication secret or key was not provided for user '{username}'",
        username=username,
    )
