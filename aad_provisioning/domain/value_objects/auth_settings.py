"""Enumerations written into the hosted workload's auth settings."""

from enum import IntEnum


class AuthProvider(IntEnum):
    """Identity provider used when a request is not authenticated."""

    AZURE_ACTIVE_DIRECTORY = 0
    FACEBOOK = 2
    GOOGLE = 3
    MICROSOFT_ACCOUNT = 4
    TWITTER = 6


class UnauthenticatedClientAction(IntEnum):
    """What the host does with an unauthenticated request."""

    REDIRECT_TO_LOGIN_PAGE = 0
    ALLOW_ANONYMOUS = 1
