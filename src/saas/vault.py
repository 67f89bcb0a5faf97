"""Encryption for third-party API credentials stored per user.

Values are sealed with Fernet (AES-CBC + HMAC-SHA256) under a server-held
key. Several keys may be configured at once: the first encrypts, every key
decrypts, so keys can be rotated without re-encrypting existing rows first.
"""

from __future__ import annotations

import base64
import hashlib
from enum import Enum

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from config.settings import Settings
from src.core.exceptions import PersistenceError
from src.core.logging import get_logger

log = get_logger(__name__)


class KeyType(str, Enum):
    OPENAI = "openai"
    SENDGRID = "sendgrid"
    AHREFS = "ahrefs"


KNOWN_KEY_TYPES: tuple[str, ...] = tuple(k.value for k in KeyType)


def derive_dev_key(secret: str) -> bytes:
    """Deterministic Fernet key derived from another secret (dev only)."""
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode()).digest())


class SecretCipher:
    """Authenticated symmetric encryption for stored credentials."""

    def __init__(self, keys: list[bytes]) -> None:
        if not keys:
            raise ValueError("SecretCipher needs at least one key")
        self._fernet = MultiFernet([Fernet(k) for k in keys])

    @classmethod
    def from_settings(cls, settings: Settings) -> SecretCipher:
        raw = settings.linkiq_encryption_keys.get_secret_value()
        keys = [k.strip().encode() for k in raw.split(",") if k.strip()]
        if not keys:
            log.warning("encryption_key_derived_from_jwt_secret")
            keys = [derive_dev_key(settings.linkiq_jwt_secret.get_secret_value())]
        return cls(keys)

    def encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode("utf-8")).decode("utf-8")

    def decrypt(self, token: str) -> str:
        try:
            return self._fernet.decrypt(token.encode("utf-8")).decode("utf-8")
        except InvalidToken as exc:
            log.error("secret_decrypt_failed")
            raise PersistenceError("Unable to decrypt stored secret") from exc

    def rotate(self, token: str) -> str:
        """Re-encrypt a stored value under the current primary key."""
        return self._fernet.rotate(token.encode("utf-8")).decode("utf-8")
