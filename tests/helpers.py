import base64
import json
from datetime import datetime, timezone

import azure.functions as func

from shared_code.models import BlobRef

ACCOUNT_KEY = base64.b64encode(b"not-a-real-storage-account-key!!").decode()
CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=devacct;"
    f"AccountKey={ACCOUNT_KEY};EndpointSuffix=core.windows.net"
)
NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingSigner:
    """Stands in for SasSigner and remembers what it was asked to sign."""

    def __init__(self):
        self.calls = []

    def resource_uri(self, ref):
        if isinstance(ref, BlobRef):
            return f"https://devacct.blob.core.windows.net/{ref.container}/{ref.blob_name}"
        return f"https://devacct.blob.core.windows.net/{ref.container}"

    def compute_signature(self, ref, policy):
        self.calls.append((ref, policy))
        return f"?sig=fake{len(self.calls)}"


def make_request(body) -> func.HttpRequest:
    raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return func.HttpRequest(
        method="POST",
        url="http://localhost/api/GetSasToken",
        headers={"Content-Type": "application/json"},
        body=raw,
    )
