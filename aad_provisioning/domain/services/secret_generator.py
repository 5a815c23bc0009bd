"""Domain service for generating application secrets."""

from __future__ import annotations

import random
import secrets
from collections.abc import Callable

from ..exceptions import InvalidArgumentError

# 60 characters: letters, digits and two symbols, without the capitals I, O, U and V.
PASSWORD_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHJKLMNPQRSTWXYZ0123456789#$"
DEFAULT_SECRET_LENGTH = 128
_SEED_BYTES = 4


def meets_complexity(password: str) -> bool:
    """Check for at least one upper, lower, digit and non-alphanumeric character."""
    return (
        bool(password)
        and any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c.isdigit() for c in password)
        and any(not c.isalnum() for c in password)
    )


class SecretGenerator:
    """
    Generates passwords that satisfy ``meets_complexity``.

    Every character is drawn from a generator seeded with fresh bytes from a
    secure source, so consecutive characters never share a random sequence.
    """

    def __init__(
        self,
        alphabet: str = PASSWORD_ALPHABET,
        *,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        """
        Initialize the generator.

        Args:
            alphabet: Characters to draw from.
            random_bytes: Secure entropy source returning ``n`` bytes.
        """
        if not alphabet:
            msg = "Password alphabet must not be empty"
            raise InvalidArgumentError(msg, argument="alphabet")
        self._alphabet = alphabet
        self._random_bytes = random_bytes

    @property
    def alphabet(self) -> str:
        """Characters passwords are drawn from."""
        return self._alphabet

    def generate(self, length: int = DEFAULT_SECRET_LENGTH) -> str:
        """
        Generate a password of exactly ``length`` characters.

        Raises:
            InvalidArgumentError: If ``length`` is not positive.
        """
        if length <= 0:
            msg = f"Password length must be positive, got {length}"
            raise InvalidArgumentError(msg, argument="length")

        password = self._draw(length)
        while not meets_complexity(password):
            password = self._draw(length)
        return password

    def _draw(self, length: int) -> str:
        """Draw ``length`` characters without checking complexity."""
        entropy = self._random_bytes(length * _SEED_BYTES)
        chars: list[str] = []
        for i in range(length):
            seed = int.from_bytes(entropy[i * _SEED_BYTES : (i + 1) * _SEED_BYTES], "little")
            chars.append(random.Random(seed).choice(self._alphabet))  # noqa: S311
        return "".join(chars)
