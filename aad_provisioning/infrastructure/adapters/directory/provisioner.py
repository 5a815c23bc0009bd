"""Application provisioning against the directory graph API."""

from __future__ import annotations

import logging
from contextlib import closing

from ....application.exceptions import SerializationError
from ....domain.entities import Application, ServicePrincipal
from ....domain.exceptions import InvalidArgumentError
from ....domain.services import DEFAULT_SECRET_LENGTH, SecretGenerator
from .client import DirectoryClient

logger = logging.getLogger(__name__)

APPLICATION_OBJECT_TYPE = "Microsoft.DirectoryServices.Application"


class DirectoryApplicationProvisioner:
    """
    Creates applications by calling the directory service directly.

    Implements the ApplicationProvisioner port. Creation is three ordered
    steps: create the application, create its service principal, then hand
    back the application with the locally generated secret. If the service
    principal cannot be created the application is left in the directory and
    must be deleted by hand.
    """

    def __init__(
        self,
        client: DirectoryClient,
        *,
        secret_generator: SecretGenerator | None = None,
        secret_length: int = DEFAULT_SECRET_LENGTH,
    ) -> None:
        """
        Initialize the provisioner.

        Args:
            client: Directory client bound to the target tenant.
            secret_generator: Generator for the application's client secret.
            secret_length: Length of generated client secrets.
        """
        self._client = client
        self._secret_generator = secret_generator or SecretGenerator()
        self._secret_length = secret_length

    def create_application(
        self,
        name: str,
        root_uri: str,
        resource_app_id: str | None = None,
    ) -> Application:
        """Create an application and its service principal."""
        application = Application.for_web_app(
            name,
            root_uri,
            self._secret_generator.generate(self._secret_length),
            resource_app_id,
        )
        codec = self._client.codec

        logger.info("Creating application with name: %s and URI: %s", name, root_uri)
        with closing(self._client.send("POST", "/applications", codec.encode(application))) as response:
            created = codec.decode(Application, self._client.read(response))

        if not created.is_created:
            msg = f"Directory did not return identifiers for application {name!r}"
            raise SerializationError(msg)

        logger.info(
            "Created application with AppId: %s and ObjectId: %s",
            created.app_id,
            created.object_id,
        )

        principal = ServicePrincipal.for_application(created)
        self._client.send("POST", "/servicePrincipals", codec.encode(principal)).close()
        logger.info("Created service principal for AppId: %s", created.app_id)

        # The service never echoes secret values back.
        created.password_credentials = application.password_credentials
        return created

    def delete_application(self, object_id: str) -> None:
        """Delete an application by object id."""
        if not object_id:
            msg = "Object id of the application to delete must not be empty"
            raise InvalidArgumentError(msg, argument="id")
        self.delete_object(object_id, APPLICATION_OBJECT_TYPE)

    def delete_object(self, object_id: str, object_type: str) -> None:
        """Delete a directory object of the given type."""
        logger.info("Deleting object of type %s and ID %s.", object_type, object_id)
        self._client.send("DELETE", f"/directoryObjects/{object_id}/{object_type}").close()
        logger.info("Object of type %s and ID %s was successfully deleted.", object_type, object_id)

    def close(self) -> None:
        """Close the underlying directory client."""
        self._client.close()
