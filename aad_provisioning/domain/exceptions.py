"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidArgumentError(DomainError):
    """Raised when a required input is missing or malformed."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        """Initialize with the name of the offending argument, if known."""
        super().__init__(message)
        self.argument = argument
