"""Domain services - Stateless operations on domain objects."""

from .secret_generator import (
    DEFAULT_SECRET_LENGTH,
    PASSWORD_ALPHABET,
    SecretGenerator,
    meets_complexity,
)

__all__ = [
    "DEFAULT_SECRET_LENGTH",
    "PASSWORD_ALPHABET",
    "SecretGenerator",
    "meets_complexity",
]
