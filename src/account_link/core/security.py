"""Credential helpers for SSO-provisioned accounts."""

import base64
import secrets

from argon2 import PasswordHasher

_password_hasher = PasswordHasher()


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token.

    Args:
        length: Number of random bytes to generate (default 32)

    Returns:
        URL-safe base64 encoded token
    """
    return (
        base64.urlsafe_b64encode(secrets.token_bytes(length))
        .decode("utf-8")
        .rstrip("=")
    )


def generate_placeholder_password(length: int = 16, suffix: str = "P!1") -> str:
    """Generate a random password for a newly provisioned account.

    The default suffix guarantees an uppercase letter, a symbol and a digit.
    Lowercase letters come only from the random part and are not guaranteed.
    """
    return generate_secure_token(length) + suffix


def hash_placeholder_credential(length: int = 16, suffix: str = "P!1") -> str:
    """Return the hash of a fresh placeholder password.

    The plaintext is discarded: SSO accounts never log in with it.
    """
    return _password_hasher.hash(generate_placeholder_password(length, suffix))
