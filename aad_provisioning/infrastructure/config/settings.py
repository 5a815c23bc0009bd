"""Application settings loaded from environment variables."""

import logging
import os
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from ...application.exceptions import ConfigurationError
from ...application.use_cases import ProvisioningOptions
from ..adapters.cli import CliConfig
from ..adapters.settings import AuthSettingsConfig
from ..adapters.token import TokenConfig

BACKENDS = ("directory", "cli")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.environ.get(key, str(default))
    try:
        return float(value)
    except ValueError as e:
        msg = f"{key} must be a number, got {value!r}"
        raise ConfigurationError(msg) from e


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Token supplied by the caller
    access_token: str = field(default_factory=lambda: _env_str("AAD_ACCESS_TOKEN"))

    # Client credentials, used only when no token is supplied
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))

    # Provisioning
    directory_endpoint: str = field(
        default_factory=lambda: _env_str("DIRECTORY_ENDPOINT", "https://graph.windows.net")
    )
    app_host_suffix: str = field(default_factory=lambda: _env_str("APP_HOST_SUFFIX", "azurewebsites.net"))
    provisioning_backend: str = field(default_factory=lambda: _env_str("PROVISIONING_BACKEND", "directory"))
    az_executable: str = field(default_factory=lambda: _env_str("AZ_EXECUTABLE", "az"))
    resource_app_id: str = field(default_factory=lambda: _env_str("RESOURCE_APP_ID"))
    runtime_version: str = field(default_factory=lambda: _env_str("RUNTIME_VERSION", "1.0.0"))
    request_timeout: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT", 30.0))

    # Auth settings file
    auth_settings_file: str = field(default_factory=lambda: _env_str("AUTH_SETTINGS_FILE", "auth.json"))
    auth_settings_encrypted: bool = field(default_factory=lambda: _env_bool("AUTH_SETTINGS_ENCRYPTED"))
    auth_settings_key: str = field(default_factory=lambda: _env_str("AUTH_SETTINGS_KEY"))
    auth_settings_key_file: str = field(
        default_factory=lambda: _env_str("AUTH_SETTINGS_KEY_FILE", "~/.config/aad-provisioning/auth.key")
    )

    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Validate settings."""
        backend = self.provisioning_backend.lower()
        if backend not in BACKENDS:
            msg = f"PROVISIONING_BACKEND must be one of {', '.join(BACKENDS)}, got {self.provisioning_backend!r}"
            raise ConfigurationError(msg)
        self.provisioning_backend = backend

        if self.request_timeout <= 0:
            msg = f"REQUEST_TIMEOUT must be positive, got {self.request_timeout}"
            raise ConfigurationError(msg)

        self.log_level = self.log_level.upper()
        if self.log_level not in logging.getLevelNamesMapping():
            msg = f"LOG_LEVEL must be a logging level name, got {self.log_level!r}"
            raise ConfigurationError(msg)

    @cached_property
    def provisioning_options(self) -> ProvisioningOptions:
        """Get provisioning options."""
        return ProvisioningOptions(
            directory_endpoint=self.directory_endpoint,
            app_host_suffix=self.app_host_suffix,
            resource_app_id=self.resource_app_id or None,
            runtime_version=self.runtime_version,
        )

    @cached_property
    def token_config(self) -> TokenConfig:
        """Get client credentials configuration."""
        return TokenConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
            resource=self.directory_endpoint,
        )

    @cached_property
    def cli_config(self) -> CliConfig:
        """Get Azure CLI configuration."""
        return CliConfig(executable=self.az_executable)

    @cached_property
    def auth_settings_config(self) -> AuthSettingsConfig:
        """Get auth settings file configuration."""
        return AuthSettingsConfig(
            path=Path(self.auth_settings_file),
            encrypted=self.auth_settings_encrypted,
            key=self.auth_settings_key,
            key_file=Path(self.auth_settings_key_file).expanduser(),
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
