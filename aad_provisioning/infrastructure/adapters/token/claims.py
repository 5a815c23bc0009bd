"""Bearer token claim extraction."""

from __future__ import annotations

from typing import Any

import jwt

from ....application.exceptions import TokenError


class JwtTokenInspector:
    """
    Reads claims from a JWT access token.

    Implements the TokenInspector port. The signature is not verified: the
    token was issued to the caller, who is already authenticated.
    """

    def claims(self, access_token: str) -> dict[str, Any]:
        """Decode the token payload."""
        try:
            return jwt.decode(access_token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            msg = f"Could not read claims from access token: {e}"
            raise TokenError(msg) from e

    def tenant_id(self, access_token: str) -> str:
        tenant_id = self.claims(access_token).get("tid")
        if not isinstance(tenant_id, str) or not tenant_id:
            msg = "Could not retrieve tenant ID from access token."
            raise TokenError(msg)
        return tenant_id

    def audience(self, access_token: str) -> str | None:
        audience = self.claims(access_token).get("aud")
        if isinstance(audience, list):
            audience = audience[0] if audience else None
        return audience if isinstance(audience, str) and audience else None
