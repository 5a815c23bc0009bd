"""Auth settings file - the persisted key/value store for a workload's auth configuration."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from ....application.exceptions import ConfigurationError
from .protection import DataProtector

logger = logging.getLogger(__name__)

AUTH_SETTINGS_PURPOSE = "secrets.manager.auth"


@dataclass(frozen=True, slots=True)
class AuthSettingsConfig:
    """Where auth settings live and whether they are encrypted."""

    path: Path = Path("auth.json")
    encrypted: bool = False
    key: str = ""
    key_file: Path = Path("~/.config/aad-provisioning/auth.key").expanduser()


class AuthSettingsFile:
    """
    Flat string-to-string auth settings persisted as a JSON object.

    Implements the SettingsStore port. Non-string values are held in their
    JSON-encoded form so arrays and numbers survive the flat map. When
    encrypted, every stored value is protected; the flag is not recorded in
    the file itself.
    """

    def __init__(self, path: str | Path, *, protector: DataProtector | None = None) -> None:
        """
        Create an empty, unencrypted store bound to ``path``.

        Args:
            path: Settings file location.
            protector: Protector used when the store is encrypted.
        """
        self._path = Path(path)
        self._protector = protector
        self._values: dict[str, str] = {}
        self._encrypted = False

    @classmethod
    def load(
        cls,
        path: str | Path,
        *,
        protector: DataProtector | None = None,
        encrypted: bool = False,
    ) -> Self:
        """
        Load settings from ``path``.

        A missing or unreadable file yields an empty, unencrypted store.

        Args:
            path: Settings file location.
            protector: Protector for encrypted values.
            encrypted: Whether the values in the file are protected.
        """
        store = cls(path, protector=protector)
        store._read(encrypted=encrypted)
        return store

    @property
    def path(self) -> Path:
        """Settings file location."""
        return self._path

    @property
    def is_encrypted(self) -> bool:
        """Whether stored values are protected."""
        return self._encrypted

    @is_encrypted.setter
    def is_encrypted(self, value: bool) -> None:
        """Switch mode, re-protecting or unprotecting every stored value."""
        if value == self._encrypted:
            return
        if value:
            self._require_protector()
            self._values = {name: self._protect(text) for name, text in self._values.items()}
        else:
            self._values = self.get_all()
        self._encrypted = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def set(self, name: str, value: object) -> None:
        """Set a value; non-string values are JSON-encoded first."""
        text = value if isinstance(value, str) else json.dumps(value)
        self._values[name] = self._protect(text) if self._encrypted else text

    def remove(self, name: str) -> None:
        """Remove a value. No-op if absent."""
        self._values.pop(name, None)

    def get_all(self) -> dict[str, str]:
        """
        Return all values in plain text.

        Raises:
            DecryptionError: If any value cannot be decrypted; nothing is returned.
        """
        if not self._encrypted:
            return dict(self._values)
        return {name: self._unprotect(text) for name, text in self._values.items()}

    def commit(self) -> None:
        """
        Replace the settings file with the current values.

        Values are written in their stored form, protected when encrypted. The
        file is swapped in atomically so readers never see a partial write.
        """
        if self._encrypted:
            self.get_all()

        payload = json.dumps(self._values, indent=2)
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        finally:
            tmp.unlink(missing_ok=True)

        logger.info("Wrote application's auth settings to %s", self._path)

    def _read(self, *, encrypted: bool) -> None:
        """Populate the store from disk."""
        try:
            raw: object = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("No auth settings at %s, starting empty", self._path)
            return
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable auth settings at %s: %s", self._path, e)
            return

        if not isinstance(raw, dict):
            logger.warning("Ignoring auth settings at %s: not a JSON object", self._path)
            return

        self._values = {
            str(name): value if isinstance(value, str) else json.dumps(value) for name, value in raw.items()
        }
        if encrypted:
            self._require_protector()
            self._encrypted = True

    def _require_protector(self) -> DataProtector:
        if self._protector is None:
            msg = "Encrypted auth settings require a data protector"
            raise ConfigurationError(msg)
        return self._protector

    def _protect(self, text: str) -> str:
        return self._require_protector().protect(text.encode("utf-8")).decode("ascii")

    def _unprotect(self, text: str) -> str:
        if not text:
            return ""
        return self._require_protector().unprotect(text.encode("utf-8")).decode("utf-8")
