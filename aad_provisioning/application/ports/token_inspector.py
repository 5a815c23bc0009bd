"""Port for reading bearer token claims - driven/secondary port."""

from typing import Protocol


class TokenInspector(Protocol):
    """Reads claims from an already-authenticated bearer token."""

    def tenant_id(self, access_token: str) -> str:
        """
        Return the tenant id (``tid`` claim).

        Raises:
            TokenError: If the token cannot be decoded or has no tenant id.
        """
        ...

    def audience(self, access_token: str) -> str | None:
        """Return the first audience (``aud`` claim), if any."""
        ...
