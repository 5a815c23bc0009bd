"""Bearer token adapters."""

from .claims import JwtTokenInspector
from .provider import ClientCredentialsTokenProvider, TokenConfig, resolve_access_token

__all__ = [
    "ClientCredentialsTokenProvider",
    "JwtTokenInspector",
    "TokenConfig",
    "resolve_access_token",
]
