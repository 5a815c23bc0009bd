"""Application entity representing an Azure AD application registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self
from urllib.parse import urlsplit

from ..exceptions import InvalidArgumentError
from ..value_objects import RequiredResourceAccess, default_required_resource_access
from .password_credential import PasswordCredential

CALLBACK_PATH = "/.auth/login/aad/callback"
SECURITY_GROUP_CLAIMS = "SecurityGroup"


def reply_url_for(root_uri: str) -> str:
    """Return the sign-in callback URL served by the host under ``root_uri``."""
    return root_uri.rstrip("/") + CALLBACK_PATH


def is_absolute_uri(uri: str) -> bool:
    """Check whether ``uri`` is an absolute http(s) URI."""
    parts = urlsplit(uri)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


@dataclass(slots=True)
class Application:
    """
    An Azure AD application registration.

    Built locally without ``object_id``/``app_id``; the directory service
    assigns both when the application is created.
    """

    display_name: str
    homepage: str | None = None
    identifier_uris: list[str] = field(default_factory=list)
    reply_urls: list[str] = field(default_factory=list)
    group_membership_claims: str | None = None
    password_credentials: list[PasswordCredential] = field(default_factory=list)
    required_resource_access: list[RequiredResourceAccess] = field(default_factory=list)
    object_id: str | None = None
    app_id: str | None = None
    available_to_other_tenants: bool | None = None
    public_client: bool | None = None

    def __post_init__(self) -> None:
        """Validate required fields."""
        if not self.display_name or not self.display_name.strip():
            msg = "Application display name must not be empty"
            raise InvalidArgumentError(msg, argument="name")

    @property
    def client_secret(self) -> str | None:
        """Value of the first password credential, if any."""
        for credential in self.password_credentials:
            if credential.value:
                return credential.value
        return None

    @property
    def is_created(self) -> bool:
        """Check if the directory service has assigned identifiers."""
        return bool(self.object_id and self.app_id)

    @classmethod
    def for_web_app(
        cls,
        name: str,
        root_uri: str,
        secret: str,
        resource_app_id: str | None = None,
    ) -> Self:
        """
        Build the application registration for a web app hosted at ``root_uri``.

        Args:
            name: Display name of the application.
            root_uri: Absolute home URI; also used as the identifier URI.
            secret: Client secret to register as the application's password.
            resource_app_id: App id of another application this one may call.

        Raises:
            InvalidArgumentError: If the name is empty or the URI is not absolute.
        """
        if not name or not name.strip():
            msg = "Application name must not be empty"
            raise InvalidArgumentError(msg, argument="name")
        if not is_absolute_uri(root_uri):
            msg = f"Application root URI must be an absolute http(s) URI: {root_uri!r}"
            raise InvalidArgumentError(msg, argument="root_uri")
        if not secret:
            msg = "Application secret must not be empty"
            raise InvalidArgumentError(msg, argument="secret")

        return cls(
            display_name=name,
            homepage=root_uri,
            identifier_uris=[root_uri],
            reply_urls=[reply_url_for(root_uri)],
            group_membership_claims=SECURITY_GROUP_CLAIMS,
            password_credentials=[PasswordCredential(value=secret)],
            required_resource_access=default_required_resource_access(resource_app_id),
        )
