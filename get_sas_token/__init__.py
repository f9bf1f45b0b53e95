import json
import logging
from functools import lru_cache

import azure.functions as func

from shared_code.settings import load_settings
from shared_code.storage_util import SasSigner
from shared_code.token_issuer import TokenIssuer, TokenRequestError, parse_token_request

# This Azure Function (GetSasToken) issues SAS tokens for a container, or for a
# single blob inside it, valid from 5 minutes ago until 1 hour from now.

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_issuer() -> TokenIssuer:
    # Settings are read once per worker and never change afterwards.
    return TokenIssuer(SasSigner(load_settings()))


def _json_response(body: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json",
    )


def handle(req: func.HttpRequest, issuer: TokenIssuer) -> func.HttpResponse:
    """
    Accepts JSON:
    {
        "container": "mydata",          # required
        "blobName": "report.csv",       # optional, scopes the token to one blob
        "permissions": "Read, Write"    # optional, defaults to Read
    }
    Returns {"token": "?sv=...", "uri": "https://<account>.blob.core.windows.net/mydata/report.csv?sv=..."}.
    """
    try:
        payload = req.get_json()
    except ValueError:
        logger.warning("Rejected request: body is not valid JSON")
        return _json_response({"error": "Invalid JSON body"}, 400)

    try:
        request = parse_token_request(payload)
        result = issuer.issue(request)
    except TokenRequestError as e:
        logger.warning("Rejected request: %s", e)
        return _json_response({"error": str(e)}, 400)

    return _json_response(result.model_dump(), 200)


def main(req: func.HttpRequest) -> func.HttpResponse:
    return handle(req, get_issuer())
