"""Infrastructure adapters - Implementations of application ports."""

from .cli import AzureCliApplicationProvisioner, CliConfig, SubprocessRunner
from .directory import DirectoryApplicationProvisioner, DirectoryClient, DirectoryClientConfig
from .settings import AuthSettingsConfig, AuthSettingsFile, FernetDataProtector
from .token import JwtTokenInspector, TokenConfig, resolve_access_token

__all__ = [
    "AuthSettingsConfig",
    "AuthSettingsFile",
    "AzureCliApplicationProvisioner",
    "CliConfig",
    "DirectoryApplicationProvisioner",
    "DirectoryClient",
    "DirectoryClientConfig",
    "FernetDataProtector",
    "JwtTokenInspector",
    "SubprocessRunner",
    "TokenConfig",
    "resolve_access_token",
]
