"""Service principal entity - the tenant-local instance of an application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

from ..exceptions import InvalidArgumentError
from .application import Application

# The first tag is required for the application to show up in the legacy portal.
INTEGRATED_APP_TAGS = ("WindowsAzureActiveDirectoryIntegratedApp", "AppServiceIntegratedApp")


@dataclass(slots=True)
class ServicePrincipal:
    """A service principal for an existing application."""

    app_id: str
    display_name: str
    account_enabled: bool = True
    tags: list[str] = field(default_factory=lambda: list(INTEGRATED_APP_TAGS))

    @classmethod
    def for_application(cls, application: Application) -> Self:
        """Create the service principal that mirrors ``application``."""
        if not application.app_id:
            msg = f"Application {application.display_name!r} has no app id yet"
            raise InvalidArgumentError(msg, argument="app_id")
        return cls(app_id=application.app_id, display_name=application.display_name)
