"""Port for application provisioning - driven/secondary port."""

from collections.abc import Callable
from typing import Protocol

from ...domain.entities import Application


class ApplicationProvisioner(Protocol):
    """
    Port for creating and deleting applications in a directory.

    Implementations are interchangeable strategies: talking to the directory
    service directly, or delegating to an external CLI.
    """

    def create_application(
        self,
        name: str,
        root_uri: str,
        resource_app_id: str | None = None,
    ) -> Application:
        """
        Create an application and its service principal.

        Args:
            name: Display name of the application.
            root_uri: Absolute home URI of the hosted workload.
            resource_app_id: App id of another application to grant access to.

        Returns:
            The created application, including its generated client secret.

        Raises:
            InvalidArgumentError: If the name or URI is invalid.
        """
        ...

    def delete_application(self, object_id: str) -> None:
        """
        Delete an application.

        Args:
            object_id: Identifier of the application to delete.
        """
        ...

    def close(self) -> None:
        """Release any resources held by the provisioner."""
        ...


# (tenant_root, access_token) -> provisioner
ProvisionerFactory = Callable[[str, str], ApplicationProvisioner]
