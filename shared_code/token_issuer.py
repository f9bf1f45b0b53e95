import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, FrozenSet, Optional

from pydantic import ValidationError

from shared_code.models import (
    AccessPolicy,
    BlobRef,
    ContainerRef,
    Permission,
    ResourceRef,
    TokenRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

# Start slightly in the past to tolerate clock skew with the storage service.
START_SKEW = timedelta(minutes=5)
VALIDITY = timedelta(hours=1)

MISSING_CONTAINER = "Specify value for 'container'"
INVALID_PERMISSIONS = "Invalid value for 'permissions'"

_PERMISSIONS_BY_NAME = {p.name.lower(): p for p in Permission}


class TokenRequestError(ValueError):
    """Client input that cannot be turned into a token. The message is returned as-is."""


def parse_permissions(value: Optional[str]) -> FrozenSet[Permission]:
    """
    "Read, Write" -> {READ, WRITE}. None means Read-only.
    """
    if value is None:
        return frozenset({Permission.READ})
    parsed = set()
    for name in value.split(","):
        permission = _PERMISSIONS_BY_NAME.get(name.strip().lower())
        if permission is None:
            raise TokenRequestError(INVALID_PERMISSIONS)
        parsed.add(permission)
    return frozenset(parsed)


def parse_token_request(payload: object) -> TokenRequest:
    if not isinstance(payload, dict):
        raise TokenRequestError("Request body must be a JSON object")
    try:
        request = TokenRequest.model_validate(payload)
    except ValidationError as e:
        field = e.errors()[0]["loc"][0]
        if field == "container":
            raise TokenRequestError(MISSING_CONTAINER) from e
        raise TokenRequestError(f"Invalid value for '{field}'") from e
    if not request.container:
        raise TokenRequestError(MISSING_CONTAINER)
    return request


class TokenIssuer:
    def __init__(self, signer, clock: Optional[Callable[[], datetime]] = None):
        self._signer = signer
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build_policy(self, permissions: FrozenSet[Permission]) -> AccessPolicy:
        now = self._clock()
        return AccessPolicy(
            start=now - START_SKEW,
            expiry=now + VALIDITY,
            permissions=permissions,
        )

    def issue(self, request: TokenRequest) -> TokenResponse:
        """Signs a request already checked by parse_token_request."""
        policy = self.build_policy(parse_permissions(request.permissions))

        # The blob does not have to exist yet (e.g. upload tokens).
        ref: ResourceRef
        if request.blob_name:
            ref = BlobRef(container=request.container, blob_name=request.blob_name)
        else:
            ref = ContainerRef(container=request.container)

        token = self._signer.compute_signature(ref, policy)
        logger.info(
            "Issued SAS for %s permissions=%s expiry=%s",
            ref,
            policy.permission_string(),
            policy.expiry.isoformat(),
        )
        return TokenResponse(token=token, uri=self._signer.resource_uri(ref) + token)
