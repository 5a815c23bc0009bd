"""Domain value objects - Immutable objects defined by their attributes."""

from .auth_settings import AuthProvider, UnauthenticatedClientAction
from .directory_permissions import AZURE_AD_GRAPH_APP_ID, DirectoryPermission
from .resource_access import (
    RequiredResourceAccess,
    ResourceAccess,
    ResourceAccessType,
    default_required_resource_access,
)

__all__ = [
    "AZURE_AD_GRAPH_APP_ID",
    "AuthProvider",
    "DirectoryPermission",
    "RequiredResourceAccess",
    "ResourceAccess",
    "ResourceAccessType",
    "UnauthenticatedClientAction",
    "default_required_resource_access",
]
