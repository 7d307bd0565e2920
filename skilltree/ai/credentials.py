"""Encryption helpers for stored provider credentials."""

from typing import Optional
from cryptography.fernet import Fernet, InvalidToken


def encrypt_credentials(plaintext: str, key: Optional[str]) -> str:
    """Encrypt with Fernet when a key is configured; store as-is otherwise."""
    if not key:
        return plaintext
    return Fernet(key.encode()).encrypt(plaintext.encode()).decode()


def decrypt_credentials(stored: str, key: Optional[str]) -> str:
    """
    Reverse of encrypt_credentials.
    Raises ValueError if a key is configured but the value was not encrypted with it.
    """
    if not key:
        return stored
    try:
        return Fernet(key.encode()).decrypt(stored.encode()).decode()
    except InvalidToken as e:
        raise ValueError("Stored credentials cannot be decrypted with CREDENTIALS_KEY") from e
