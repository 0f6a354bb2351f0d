from __future__ import annotations

import logging

import pytest
import structlog

from kms_envelope.kms.base import key_version_name
from kms_envelope.kms.memory import InMemoryKeyService
from kms_envelope.logging import use_library_defaults
from kms_envelope.models import KeyAlgorithm
from kms_envelope.services.asymmetric import AsymmetricOperations

RSA_DECRYPT = key_version_name("test-project", "global", "ring", "rsa-decrypt", 1)
RSA_SIGN = key_version_name("test-project", "global", "ring", "rsa-sign", 1)
EC_SIGN = key_version_name("test-project", "global", "ring", "ec-sign", 1)
EC_P224_SIGN = key_version_name("test-project", "global", "ring", "ec-p224-sign", 1)


@pytest.fixture(scope="session")
def key_service() -> InMemoryKeyService:
    service = InMemoryKeyService()
    service.create_key(RSA_DECRYPT, KeyAlgorithm.RSA_DECRYPT_OAEP_2048_SHA256)
    service.create_key(RSA_SIGN, KeyAlgorithm.RSA_SIGN_PSS_2048_SHA256)
    service.create_key(EC_SIGN, KeyAlgorithm.EC_SIGN_P256_SHA256)
    service.create_key(EC_P224_SIGN, KeyAlgorithm.EC_SIGN_P224_SHA256)
    return service


@pytest.fixture()
def ops(key_service: InMemoryKeyService) -> AsymmetricOperations:
    return AsymmetricOperations(key_service)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    # configure_logging installs a plain StreamHandler on the root logger
    for handler in [h for h in root.handlers if type(h) is logging.StreamHandler]:
        root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
    use_library_defaults()
