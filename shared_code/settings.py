import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

# App settings checked in order; the first non-empty one wins.
CONNECTION_STRING_SETTINGS = ("SAS_STORAGE_CONNECTION_STRING", "AzureWebJobsStorage")


class StorageSettings(BaseModel):
    """
    Read-only storage configuration for the token issuer.
    """

    model_config = ConfigDict(frozen=True)

    connection_string: str


def load_settings(environ: Optional[Mapping[str, str]] = None) -> StorageSettings:
    env = os.environ if environ is None else environ
    for name in CONNECTION_STRING_SETTINGS:
        value = env.get(name)
        if value:
            return StorageSettings(connection_string=value)
    raise RuntimeError(
        "Missing storage connection string; set one of: "
        + ", ".join(CONNECTION_STRING_SETTINGS)
    )
