"""Directory graph adapter."""

from .client import DirectoryClient, DirectoryClientConfig
from .codec import DirectoryProtocolCodec
from .models import ErrorPayload
from .provisioner import DirectoryApplicationProvisioner

__all__ = [
    "DirectoryApplicationProvisioner",
    "DirectoryClient",
    "DirectoryClientConfig",
    "DirectoryProtocolCodec",
    "ErrorPayload",
]
