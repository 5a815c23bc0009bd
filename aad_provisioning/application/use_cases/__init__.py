"""Application use cases."""

from .provision_application import (
    ProvisioningFacade,
    ProvisioningOptions,
    require_app_name,
    require_object_id,
)

__all__ = ["ProvisioningFacade", "ProvisioningOptions", "require_app_name", "require_object_id"]
