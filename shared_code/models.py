from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Permission(str, Enum):
    """Permission names a caller may request, valued by their SAS letter."""

    READ = "r"
    ADD = "a"
    CREATE = "c"
    WRITE = "w"
    DELETE = "d"
    LIST = "l"


# Order the service expects inside the "sp" field.
PERMISSION_ORDER = (
    Permission.READ,
    Permission.ADD,
    Permission.CREATE,
    Permission.WRITE,
    Permission.DELETE,
    Permission.LIST,
)


class TokenRequest(BaseModel):
    """
    JSON body accepted by the GetSasToken function:
    {
        "container": "mydata",
        "blobName": "report.csv",
        "permissions": "Read, Write"
    }
    Only "container" is required.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    container: Optional[str] = None
    blob_name: Optional[str] = Field(default=None, alias="blobName")
    permissions: Optional[str] = None


class ContainerRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    container: str


class BlobRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    container: str
    blob_name: str


ResourceRef = Union[ContainerRef, BlobRef]


class AccessPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    expiry: datetime
    permissions: FrozenSet[Permission]

    def permission_string(self) -> str:
        return "".join(p.value for p in PERMISSION_ORDER if p in self.permissions)


class TokenResponse(BaseModel):
    token: str
    uri: str
