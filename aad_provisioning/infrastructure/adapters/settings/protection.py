"""Field-level protection for auth settings values."""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ....application.exceptions import ConfigurationError, DecryptionError

logger = logging.getLogger(__name__)

MIN_MASTER_KEY_BYTES = 32


class DataProtector(Protocol):
    """Symmetric protection scoped to a purpose."""

    def protect(self, plaintext: bytes) -> bytes: ...

    def unprotect(self, token: bytes) -> bytes:
        """
        Reverse ``protect``.

        Raises:
            DecryptionError: If the token was not produced for this purpose and key.
        """
        ...


class FernetDataProtector:
    """
    Fernet encryption with a key derived from a master key and a purpose tag.

    Two protectors with the same master key but different purposes cannot read
    each other's tokens.
    """

    def __init__(self, master_key: bytes, purpose: str) -> None:
        """Derive the Fernet key for ``purpose`` from ``master_key``."""
        if len(master_key) < MIN_MASTER_KEY_BYTES:
            msg = f"Master key must be at least {MIN_MASTER_KEY_BYTES} bytes"
            raise ConfigurationError(msg)

        derived = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=purpose.encode("utf-8"),
        ).derive(master_key)
        self._fernet = Fernet(base64.urlsafe_b64encode(derived))
        self.purpose = purpose

    def protect(self, plaintext: bytes) -> bytes:
        return self._fernet.encrypt(plaintext)

    def unprotect(self, token: bytes) -> bytes:
        try:
            return self._fernet.decrypt(token)
        except InvalidToken as e:
            msg = "Failed to decrypt settings."
            raise DecryptionError(msg) from e


def decode_master_key(encoded: str | bytes) -> bytes:
    """Decode a urlsafe base64 master key."""
    try:
        key = base64.urlsafe_b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        msg = "Auth settings key is not valid urlsafe base64"
        raise ConfigurationError(msg) from e

    if len(key) < MIN_MASTER_KEY_BYTES:
        msg = f"Auth settings key must decode to at least {MIN_MASTER_KEY_BYTES} bytes"
        raise ConfigurationError(msg)
    return key


def load_or_create_master_key(path: Path) -> bytes:
    """
    Read the master key from ``path``, creating it on first use.

    New key files are readable by the current user only.
    """
    if path.exists():
        return decode_master_key(path.read_bytes().strip())

    path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    key = Fernet.generate_key()
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(key)

    logger.info("Created auth settings key at %s", path)
    return decode_master_key(key)
