"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""


class DirectoryError(ApplicationError):
    """Base exception for failures talking to the directory service."""


class TransportError(DirectoryError):
    """Raised on connection failures or error responses without a structured payload."""


class ProtocolError(DirectoryError):
    """Raised when the directory service returns a structured error payload."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize with the service-provided message, error code and HTTP status."""
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class SerializationError(DirectoryError):
    """Raised when a directory payload cannot be encoded or decoded."""


class ProvisioningError(ApplicationError):
    """Raised when provisioning completes without the data needed to configure auth."""


class DecryptionError(ApplicationError):
    """Raised when protected auth settings cannot be decrypted."""


class TokenError(ApplicationError):
    """Raised when claims cannot be read from a bearer token."""


class CommandError(ApplicationError):
    """Raised when an external command fails."""

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = "") -> None:
        """Initialize with the command's exit code and captured stderr."""
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class CommandNotFoundError(CommandError):
    """Raised when an external command is not installed."""
