"""Permission grants requested by an application."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from .directory_permissions import AZURE_AD_GRAPH_APP_ID, DirectoryPermission


class ResourceAccessType(StrEnum):
    """Kind of permission being requested."""

    SCOPE = "Scope"  # delegated
    ROLE = "Role"  # application

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ResourceAccess:
    """A single permission on a resource application."""

    id: UUID
    type: ResourceAccessType = ResourceAccessType.SCOPE


@dataclass(frozen=True, slots=True)
class RequiredResourceAccess:
    """The set of permissions an application requires on one resource application."""

    resource_app_id: str
    resource_access: tuple[ResourceAccess, ...] = field(default_factory=tuple)


def default_required_resource_access(
    resource_app_id: str | None = None,
) -> list[RequiredResourceAccess]:
    """
    Build the permission set for a newly provisioned web application.

    Sign-in and directory read access on the directory graph are always
    requested. Access to another application is added only when its app id
    is given.
    """
    permissions = [
        RequiredResourceAccess(
            resource_app_id=AZURE_AD_GRAPH_APP_ID,
            resource_access=(
                ResourceAccess(DirectoryPermission.ENABLE_SSO.value),
                ResourceAccess(DirectoryPermission.READ_DIRECTORY_DATA.value),
            ),
        )
    ]

    if resource_app_id:
        permissions.append(
            RequiredResourceAccess(
                resource_app_id=resource_app_id,
                resource_access=(ResourceAccess(DirectoryPermission.ACCESS_APPLICATION.value),),
            )
        )

    return permissions
