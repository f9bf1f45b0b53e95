import pytest

from shared_code.settings import StorageSettings
from shared_code.storage_util import SasSigner
from shared_code.token_issuer import TokenIssuer

from .helpers import CONNECTION_STRING, NOW, RecordingSigner


@pytest.fixture
def settings():
    return StorageSettings(connection_string=CONNECTION_STRING)


@pytest.fixture
def recording_signer():
    return RecordingSigner()


@pytest.fixture
def fake_issuer(recording_signer):
    return TokenIssuer(recording_signer, clock=lambda: NOW)


@pytest.fixture
def real_issuer(settings):
    return TokenIssuer(SasSigner(settings), clock=lambda: NOW)
