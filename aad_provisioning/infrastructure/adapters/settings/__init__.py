"""Auth settings adapter."""

from .auth_settings_file import AUTH_SETTINGS_PURPOSE, AuthSettingsConfig, AuthSettingsFile
from .protection import (
    DataProtector,
    FernetDataProtector,
    decode_master_key,
    load_or_create_master_key,
)

__all__ = [
    "AUTH_SETTINGS_PURPOSE",
    "AuthSettingsConfig",
    "AuthSettingsFile",
    "DataProtector",
    "FernetDataProtector",
    "decode_master_key",
    "load_or_create_master_key",
]
