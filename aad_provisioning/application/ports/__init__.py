"""Application ports - Interfaces for external adapters."""

from .application_provisioner import ApplicationProvisioner, ProvisionerFactory
from .process_runner import ProcessResult, ProcessRunner
from .settings_store import SettingsStore, SettingsStoreFactory
from .token_inspector import TokenInspector

__all__ = [
    "ApplicationProvisioner",
    "ProcessResult",
    "ProcessRunner",
    "ProvisionerFactory",
    "SettingsStore",
    "SettingsStoreFactory",
    "TokenInspector",
]
