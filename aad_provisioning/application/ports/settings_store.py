"""Port for the auth settings store - driven/secondary port."""

from collections.abc import Callable
from typing import Protocol


class SettingsStore(Protocol):
    """
    Port for the persisted key/value auth settings of a hosted workload.

    Values are always held as strings; when the store is encrypted every value
    is protected, never only some of them.
    """

    @property
    def is_encrypted(self) -> bool:
        """Whether stored values are protected."""
        ...

    def set(self, name: str, value: object) -> None:
        """Set a value; non-string values are JSON-encoded first."""
        ...

    def remove(self, name: str) -> None:
        """Remove a value. No-op if absent."""
        ...

    def get_all(self) -> dict[str, str]:
        """
        Return all values in plain text.

        Raises:
            DecryptionError: If any protected value cannot be decrypted.
        """
        ...

    def commit(self) -> None:
        """Persist all values, replacing the previous contents."""
        ...


SettingsStoreFactory = Callable[[], SettingsStore]
