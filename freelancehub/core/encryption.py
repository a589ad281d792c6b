"""Encryption utilities for payment API keys stored at rest.

Values are encrypted with AES-256-GCM under a key derived from
ENCRYPTION_SECRET via scrypt, and serialized as ``iv:auth_tag:ciphertext``
in hex so they fit in a single text column.
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from freelancehub.core.config import settings


KEY_SALT = b"salt"
KEY_LENGTH = 32
IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
ASSOCIATED_DATA = b"encryption-key"

_key: bytes | None = None


class EncryptedValueFormatError(ValueError):
    """Stored value is not in iv:auth_tag:ciphertext form."""


def _derive_key(secret: str) -> bytes:
    kdf = Scrypt(salt=KEY_SALT, length=KEY_LENGTH, n=2**14, r=8, p=1)
    return kdf.derive(secret.encode())


def get_key() -> bytes:
    """Get or derive the symmetric key for encryption/decryption."""
    global _key
    if _key is None:
        if not settings.ENCRYPTION_SECRET:
            raise RuntimeError(
                "ENCRYPTION_SECRET not configured. "
                'Generate with: python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        _key = _derive_key(settings.ENCRYPTION_SECRET)
    return _key


def reset_key_cache() -> None:
    """Forget the derived key (after ENCRYPTION_SECRET changes)."""
    global _key
    _key = None


def encrypt(plaintext: str) -> str:
    """Encrypt a secret string for storage."""
    iv = os.urandom(IV_LENGTH)
    sealed = AESGCM(get_key()).encrypt(iv, plaintext.encode("utf-8"), ASSOCIATED_DATA)
    ciphertext, auth_tag = sealed[:-AUTH_TAG_LENGTH], sealed[-AUTH_TAG_LENGTH:]
    return f"{iv.hex()}:{auth_tag.hex()}:{ciphertext.hex()}"


def decrypt(encrypted: str) -> str:
    """Decrypt a value produced by encrypt()."""
    parts = encrypted.split(":")
    if len(parts) != 3:
        raise EncryptedValueFormatError("Invalid encrypted text format")

    iv_hex, auth_tag_hex, ciphertext_hex = parts
    try:
        iv = bytes.fromhex(iv_hex)
        auth_tag = bytes.fromhex(auth_tag_hex)
        ciphertext = bytes.fromhex(ciphertext_hex)
    except ValueError:
        raise EncryptedValueFormatError("Invalid encrypted text format")

    if not iv or len(auth_tag) != AUTH_TAG_LENGTH:
        raise EncryptedValueFormatError("Invalid encrypted text format")

    try:
        plaintext = AESGCM(get_key()).decrypt(iv, ciphertext + auth_tag, ASSOCIATED_DATA)
    except InvalidTag:
        raise ValueError("Invalid or corrupted encrypted value")
    return plaintext.decode("utf-8")


def is_encryption_configured() -> bool:
    """Check if encryption is properly configured."""
    return bool(settings.ENCRYPTION_SECRET)
