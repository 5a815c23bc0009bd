#!/usr/bin/env python3
"""
AAD application provisioning

Composition root and command-line entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

from . import __version__
from .application.exceptions import ApplicationError
from .application.ports import ApplicationProvisioner
from .application.use_cases import ProvisioningFacade, require_app_name, require_object_id
from .domain.exceptions import DomainError
from .infrastructure.adapters import (
    AuthSettingsFile,
    AzureCliApplicationProvisioner,
    DirectoryApplicationProvisioner,
    DirectoryClient,
    DirectoryClientConfig,
    FernetDataProtector,
    JwtTokenInspector,
    SubprocessRunner,
    resolve_access_token,
)
from .infrastructure.adapters.directory import DirectoryProtocolCodec
from .infrastructure.adapters.settings import (
    AUTH_SETTINGS_PURPOSE,
    decode_master_key,
    load_or_create_master_key,
)
from .infrastructure.config import Settings, load_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stdout."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings
        self._codec = DirectoryProtocolCodec()

    def create_provisioner(self, tenant_root: str, access_token: str) -> ApplicationProvisioner:
        """Create the provisioner selected by PROVISIONING_BACKEND."""
        if self._settings.provisioning_backend == "cli":
            return AzureCliApplicationProvisioner(
                SubprocessRunner(timeout=self._settings.cli_config.timeout),
                config=self._settings.cli_config,
                codec=self._codec,
            )

        client = DirectoryClient(
            DirectoryClientConfig(
                tenant_url=tenant_root,
                access_token=access_token,
                timeout=self._settings.request_timeout,
            ),
            codec=self._codec,
        )
        return DirectoryApplicationProvisioner(client)

    def create_data_protector(self) -> FernetDataProtector:
        """Create the protector for encrypted auth settings."""
        config = self._settings.auth_settings_config
        master_key = decode_master_key(config.key) if config.key else load_or_create_master_key(config.key_file)
        return FernetDataProtector(master_key, AUTH_SETTINGS_PURPOSE)

    def create_settings_store(self) -> AuthSettingsFile:
        """Load the auth settings file, encrypting it if configured."""
        config = self._settings.auth_settings_config
        if not config.encrypted:
            return AuthSettingsFile.load(config.path)

        store = AuthSettingsFile.load(config.path, protector=self.create_data_protector(), encrypted=True)
        if not store.is_encrypted:
            store.is_encrypted = True
        return store

    def create_facade(self, resource_app_id: str | None = None) -> ProvisioningFacade:
        """Create the provisioning facade with all dependencies."""
        options = self._settings.provisioning_options
        if resource_app_id:
            options = replace(options, resource_app_id=resource_app_id)

        return ProvisioningFacade(
            provisioner_factory=self.create_provisioner,
            settings_store_factory=self.create_settings_store,
            token_inspector=JwtTokenInspector(),
            options=options,
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="aad-provision",
        description="Create or delete the Azure Active Directory application of a hosted workload.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser(
        "create",
        help="Create an AAD application and write its auth settings",
    )
    create.add_argument("--app-name", default="", help="Name of new Azure Active Directory application")
    create.add_argument("--resource-app-id", default=None, help="App id of an application to grant access to")
    create.add_argument("--access-token", default=None, help="Bearer token for the directory service")

    delete = subparsers.add_parser("delete", help="Delete an AAD application")
    delete.add_argument(
        "--id",
        dest="object_id",
        default="",
        help="Object id of the application to delete (the CLI backend also accepts app id or identifier uri)",
    )
    delete.add_argument("--access-token", default=None, help="Bearer token for the directory service")

    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        container = ApplicationContainer(settings)
        facade = container.create_facade(resource_app_id=getattr(args, "resource_app_id", None))

        # Reject missing arguments before a token is acquired over the network.
        if args.command == "create":
            require_app_name(args.app_name)
        else:
            require_object_id(args.object_id)

        access_token = resolve_access_token(args.access_token or settings.access_token, settings.token_config)

        match args.command:
            case "create":
                application = facade.create_aad_application(access_token or "", args.app_name)
                logger.info(
                    "AAD Application %s created with AppId %s and ObjectId %s",
                    application.display_name,
                    application.app_id,
                    application.object_id,
                )
            case "delete":
                facade.delete_aad_application(args.object_id, access_token)

        return 0

    except (ApplicationError, DomainError) as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 1


def main() -> None:
    """Main entry point."""
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
