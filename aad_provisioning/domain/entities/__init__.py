"""Domain entities - Objects with identity and lifecycle."""

from .application import CALLBACK_PATH, Application, is_absolute_uri, reply_url_for
from .password_credential import PasswordCredential
from .service_principal import INTEGRATED_APP_TAGS, ServicePrincipal

__all__ = [
    "CALLBACK_PATH",
    "INTEGRATED_APP_TAGS",
    "Application",
    "PasswordCredential",
    "ServicePrincipal",
    "is_absolute_uri",
    "reply_url_for",
]
