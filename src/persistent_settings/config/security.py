"""Encryption of individual settings fields.

Uses Fernet symmetric encryption with a key derived from an application
supplied password and a static salt. Values are encrypted from their
canonical string form and are stored with an 'ENC:' prefix.
"""

import base64
import hashlib
from typing import Any, Optional, Protocol

from cryptography.fernet import Fernet, InvalidToken

from ..core.fields import FieldKind
from ..core.marshaling import parse_value
from ..errors import ConfigurationError, MarshalError
from ..logging_config import get_logger

logger = get_logger("security")

# Static salt - not secret, just adds entropy
DEFAULT_SALT = b"persistent_settings_v1_salt"

ENCRYPTED_PREFIX = "ENC:"
PBKDF2_ITERATIONS = 100000


class EncryptionAdapter(Protocol):
    """Capability the framework needs to store encrypted fields"""

    def supports_type(self, kind: FieldKind) -> bool:
        ...

    def encrypt(self, plain_text: str) -> str:
        ...

    def decrypt(self, encrypted_text: str, kind: FieldKind, enum_type: Optional[type] = None) -> Any:
        ...


def derive_key(password: str, salt: bytes = DEFAULT_SALT) -> bytes:
    """Derive a Fernet key from a password.

    Args:
        password: Application supplied password
        salt: Salt mixed into the derivation

    Returns:
        32-byte key, url-safe base64 encoded as Fernet expects
    """
    key = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt,
        iterations=PBKDF2_ITERATIONS,
        dklen=32
    )
    return base64.urlsafe_b64encode(key)


class FernetEncryption:
    """Password based encryption adapter for settings fields.

    Args:
        password: Password the key is derived from; must not be empty
        salt: Optional salt overriding DEFAULT_SALT
    """

    def __init__(self, password: str, salt: bytes = DEFAULT_SALT):
        if not password:
            raise ConfigurationError("An encryption password is required.")
        self._cipher = Fernet(derive_key(password, salt))

    def supports_type(self, kind: FieldKind) -> bool:
        """Every field kind has a canonical string form, so all are supported"""
        return isinstance(kind, FieldKind)

    def encrypt(self, plain_text: str) -> str:
        """Encrypt a canonical string for storage.

        Returns:
            Encrypted token prefixed with 'ENC:'
        """
        encrypted = self._cipher.encrypt(plain_text.encode('utf-8'))
        return f"{ENCRYPTED_PREFIX}{encrypted.decode('utf-8')}"

    def decrypt(self, encrypted_text: str, kind: FieldKind, enum_type: Optional[type] = None) -> Any:
        """Decrypt a stored value and convert it back to ``kind``.

        Raises:
            MarshalError: If the text isn't encrypted, the token is invalid
                or the plain text can't be parsed as ``kind``
        """
        if not is_encrypted(encrypted_text):
            raise MarshalError("stored value is not encrypted", kind=kind)

        try:
            token = encrypted_text[len(ENCRYPTED_PREFIX):].encode('utf-8')
            plain_text = self._cipher.decrypt(token).decode('utf-8')
        except (InvalidToken, UnicodeError) as e:
            logger.error(f"Failed to decrypt {kind.value} value")
            raise MarshalError("decryption failed", kind=kind) from e

        return parse_value(kind, plain_text, enum_type)


def is_encrypted(text: str) -> bool:
    """Check if a string is encrypted.

    Args:
        text: The string to check

    Returns:
        True if the string appears to be encrypted
    """
    return text.startswith(ENCRYPTED_PREFIX) if text else False
