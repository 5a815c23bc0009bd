"""Well-known identifiers on the directory graph."""

from enum import Enum
from typing import Final
from uuid import UUID

AZURE_AD_GRAPH_APP_ID: Final = "00000002-0000-0000-c000-000000000000"


class DirectoryPermission(Enum):
    """Permission ids exposed by the directory graph service principal."""

    ACCESS_APPLICATION = UUID("92042086-4970-4f83-be1c-e9c8e2fab4c8")
    ENABLE_SSO = UUID("311a71cc-e848-46a1-bdf8-97ff7156d8e6")
    READ_DIRECTORY_DATA = UUID("5778995a-e1bf-45b8-affa-663a9f3f4d04")
    READ_AND_WRITE_DIRECTORY_DATA = UUID("78c8a3c8-a07e-4b9e-af1b-b5ccab50a175")
