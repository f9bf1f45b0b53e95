from azure.storage.blob import (
    BlobSasPermissions,
    BlobServiceClient,
    ContainerSasPermissions,
    generate_blob_sas,
    generate_container_sas,
)

from shared_code.models import AccessPolicy, BlobRef, ResourceRef
from shared_code.settings import StorageSettings


class SasSigner:
    """
    Signs SAS tokens with the storage account key.

    Building the client and signing are local operations; no request is sent
    to the storage account.
    """

    def __init__(self, settings: StorageSettings):
        self._bsc = BlobServiceClient.from_connection_string(settings.connection_string)
        credential = self._bsc.credential
        account_key = getattr(credential, "account_key", None)
        if not account_key:
            raise RuntimeError("Storage connection string must include an AccountKey")
        self.account_name = self._bsc.account_name
        self._account_key = account_key

    def resource_uri(self, ref: ResourceRef) -> str:
        if isinstance(ref, BlobRef):
            return self._bsc.get_blob_client(ref.container, ref.blob_name).url
        return self._bsc.get_container_client(ref.container).url

    def compute_signature(self, ref: ResourceRef, policy: AccessPolicy) -> str:
        """
        Returns the SAS as a query string (leading "?") so that
        resource_uri(ref) + token is a usable URL.
        """
        letters = policy.permission_string()
        if isinstance(ref, BlobRef):
            sas = generate_blob_sas(
                account_name=self.account_name,
                container_name=ref.container,
                blob_name=ref.blob_name,
                account_key=self._account_key,
                # "l" is passed through; the service decides what it allows on a blob
                permission=BlobSasPermissions.from_string(letters),
                start=policy.start,
                expiry=policy.expiry,
            )
        else:
            sas = generate_container_sas(
                account_name=self.account_name,
                container_name=ref.container,
                account_key=self._account_key,
                permission=ContainerSasPermissions.from_string(letters),
                start=policy.start,
                expiry=policy.expiry,
            )
        return f"?{sas}"
