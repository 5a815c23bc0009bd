"""Use case for provisioning an AAD application and writing its auth settings."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass

from ...domain.entities import Application, is_absolute_uri, reply_url_for
from ...domain.exceptions import InvalidArgumentError
from ...domain.value_objects import AuthProvider, UnauthenticatedClientAction
from ..exceptions import ProvisioningError
from ..ports import ProvisionerFactory, SettingsStore, SettingsStoreFactory, TokenInspector

logger = logging.getLogger(__name__)

ISSUER_TEMPLATE = "https://sts.windows.net/{tenant_id}/"


@dataclass(frozen=True, slots=True)
class ProvisioningOptions:
    """Environment-specific values used when provisioning."""

    directory_endpoint: str = "https://graph.windows.net"
    app_host_suffix: str = "azurewebsites.net"
    resource_app_id: str | None = None
    runtime_version: str = "1.0.0"


def require_app_name(app_name: str) -> None:
    """Reject a missing application name."""
    if not app_name:
        msg = "Must specify name of new Azure Active Directory application with --app-name parameter."
        raise InvalidArgumentError(msg, argument="app-name")


def require_object_id(object_id: str) -> None:
    """Reject a missing application id."""
    if not object_id:
        msg = "Must specify the application to delete with --id parameter."
        raise InvalidArgumentError(msg, argument="id")


class ProvisioningFacade:
    """
    Creates and deletes the AAD application backing a hosted workload.

    Creation provisions the application through the configured provisioner and,
    only once that has fully succeeded, writes the workload's auth settings.
    """

    def __init__(
        self,
        provisioner_factory: ProvisionerFactory,
        settings_store_factory: SettingsStoreFactory,
        token_inspector: TokenInspector,
        options: ProvisioningOptions | None = None,
    ) -> None:
        """
        Initialize the facade.

        Args:
            provisioner_factory: Builds a provisioner for a tenant root and token.
            settings_store_factory: Loads the auth settings store to write into.
            token_inspector: Reads tenant and audience claims from bearer tokens.
            options: Endpoint and naming options.
        """
        self._provisioner_factory = provisioner_factory
        self._settings_store_factory = settings_store_factory
        self._token_inspector = token_inspector
        self._options = options or ProvisioningOptions()

    def create_aad_application(self, access_token: str, app_name: str) -> Application:
        """
        Create an AAD application for ``app_name`` and persist its auth settings.

        Returns:
            The created application.

        Raises:
            InvalidArgumentError: If the application name or token is missing.
            TokenError: If the tenant id cannot be read from the token.
            DecryptionError: If the existing auth settings cannot be read back.
        """
        require_app_name(app_name)
        if not access_token:
            msg = "An access token is required to create an Azure Active Directory application."
            raise InvalidArgumentError(msg, argument="access-token")

        tenant_id = self._token_inspector.tenant_id(access_token)
        tenant_root = self.tenant_root(access_token, tenant_id)

        # The store must be usable before anything is created in the directory.
        settings = self._settings_store_factory()
        settings.get_all()

        with closing(self._provisioner_factory(tenant_root, access_token)) as provisioner:
            application = provisioner.create_application(
                app_name,
                self.home_uri(app_name),
                self._options.resource_app_id,
            )

        logger.info("Successfully created AAD Application %s", application.display_name)

        if not application.app_id or not application.client_secret:
            msg = f"AAD Application {application.display_name} was created without an app id or secret"
            raise ProvisioningError(msg)

        self.create_auth_settings(
            app_name,
            application.app_id,
            application.client_secret,
            tenant_id,
            settings=settings,
        )
        return application

    def delete_aad_application(self, object_id: str, access_token: str | None = None) -> None:
        """
        Delete the AAD application identified by ``object_id``.

        The token is only needed when the provisioner talks to the directory
        service directly.
        """
        require_object_id(object_id)

        if access_token:
            tenant_root = self.tenant_root(access_token, self._token_inspector.tenant_id(access_token))
        else:
            tenant_root = self._options.directory_endpoint

        with closing(self._provisioner_factory(tenant_root, access_token or "")) as provisioner:
            provisioner.delete_application(object_id)

        logger.info("AAD Application %s successfully deleted", object_id)

    def create_auth_settings(
        self,
        app_name: str,
        client_id: str,
        client_secret: str,
        tenant_id: str,
        *,
        settings: SettingsStore | None = None,
    ) -> None:
        """
        Write the auth settings for a provisioned application and commit them.

        ``settings`` is loaded from the store factory when not given.
        """
        if settings is None:
            settings = self._settings_store_factory()

        settings.set("allowedAudiences", [reply_url_for(self.home_uri(app_name))])
        settings.set("isAadAutoProvisioned", "true")
        settings.set("clientId", client_id)
        settings.set("clientSecret", client_secret)
        settings.set("defaultProvider", int(AuthProvider.AZURE_ACTIVE_DIRECTORY))
        settings.set("enabled", "True")
        settings.set("issuer", ISSUER_TEMPLATE.format(tenant_id=tenant_id))
        settings.set("runtimeVersion", self._options.runtime_version)
        settings.set("tokenStoreEnabled", "true")
        settings.set("unauthenticatedClientAction", int(UnauthenticatedClientAction.ALLOW_ANONYMOUS))

        settings.commit()

    def home_uri(self, app_name: str) -> str:
        """Home URI of the hosted workload named ``app_name``."""
        return f"https://{app_name}.{self._options.app_host_suffix}"

    def tenant_root(self, access_token: str, tenant_id: str) -> str:
        """
        Directory service root for the token's tenant.

        The token's audience is used as the service endpoint when it is a URL;
        otherwise the configured directory endpoint is.
        """
        audience = self._token_inspector.audience(access_token)
        endpoint = audience if audience and is_absolute_uri(audience) else self._options.directory_endpoint
        return f"{endpoint.rstrip('/')}/{tenant_id}"
