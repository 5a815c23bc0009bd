"""Access token resolution for the command line."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

import msal

from ....application.exceptions import TokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """Client credentials used to obtain a directory token."""

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    resource: str = "https://graph.windows.net"

    @property
    def is_configured(self) -> bool:
        """Check if client credentials are complete."""
        return bool(self.tenant_id and self.client_id and self.client_secret)


class ClientCredentialsTokenProvider:
    """Acquires directory tokens with the client credentials flow."""

    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"

    def __init__(self, config: TokenConfig) -> None:
        """Initialize the provider."""
        self._config = config
        self._msal_app: msal.ConfidentialClientApplication | None = None

    @property
    def scopes(self) -> list[str]:
        return [f"{self._config.resource.rstrip('/')}/.default"]

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._config.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._config.client_id,
                client_credential=self._config.client_secret,
                authority=authority,
            )
        return self._msal_app

    def acquire_token(self) -> str:
        """Acquire an access token for the directory resource."""
        result = self._get_msal_app().acquire_token_for_client(scopes=self.scopes)

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token: {error}"
            raise TokenError(msg)

        logger.info("Acquired directory token for client %s", self._config.client_id)
        return result["access_token"]


def resolve_access_token(explicit: str | None, config: TokenConfig) -> str | None:
    """
    Pick the bearer token to provision with.

    An explicitly supplied token wins; otherwise one is acquired with client
    credentials when they are configured. Returns None when neither is available.
    """
    if explicit:
        return explicit
    if config.is_configured:
        return ClientCredentialsTokenProvider(config).acquire_token()
    return None
