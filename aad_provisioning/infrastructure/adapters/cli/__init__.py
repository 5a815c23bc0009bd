"""Azure CLI adapter."""

from .process_runner import SubprocessRunner
from .provisioner import AzureCliApplicationProvisioner, CliConfig

__all__ = ["AzureCliApplicationProvisioner", "CliConfig", "SubprocessRunner"]
