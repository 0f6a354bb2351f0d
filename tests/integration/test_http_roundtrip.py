"""Drive the HTTP backend against an in-process service speaking the same JSON."""
from __future__ import annotations

import json
from urllib.parse import urlsplit

import pytest

from kms_envelope.core.exceptions import FetchFailed, VerificationFailed
from kms_envelope.kms.http import CloudKmsHttpClient
from kms_envelope.kms.memory import InMemoryKeyService
from kms_envelope.models import KeyAlgorithm
from kms_envelope.services.asymmetric import AsymmetricOperations

DECRYPT_KEY = "projects/p/locations/global/keyRings/r/cryptoKeys/decrypt/cryptoKeyVersions/1"
SIGN_KEY = "projects/p/locations/global/keyRings/r/cryptoKeys/sign/cryptoKeyVersions/1"


class _Response:
    def __init__(self, status_code: int, payload: dict) -> None:
        self.status_code = status_code
        self.reason = "OK" if status_code < 400 else "Error"
        self._body = json.dumps(payload)

    def json(self):
        return json.loads(self._body)


class _LoopbackSession:
    """Routes Cloud KMS REST calls to an ``InMemoryKeyService``."""

    def __init__(self, backend: InMemoryKeyService) -> None:
        self.backend = backend

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = urlsplit(url).path.removeprefix("/v1/")
        try:
            if method == "GET" and path.endswith("/publicKey"):
                return _Response(200, {"pem": self.backend.get_public_key(path.removesuffix("/publicKey"))})
            name, _, action = path.partition(":")
            if action == "asymmetricDecrypt":
                return _Response(200, {"plaintext": self.backend.asymmetric_decrypt(name, json["ciphertext"])})
            if action == "asymmetricSign":
                return _Response(200, {"signature": self.backend.asymmetric_sign(name, json["digest"]["sha256"])})
        except Exception as exc:
            status = getattr(exc, "status", 500) or 500
            return _Response(status, {"error": {"code": status, "message": str(exc)}})
        return _Response(404, {"error": {"code": 404, "message": f"no route for {method} {path}"}})


@pytest.fixture(scope="module")
def ops() -> AsymmetricOperations:
    backend = InMemoryKeyService()
    backend.create_key(DECRYPT_KEY, KeyAlgorithm.RSA_DECRYPT_OAEP_2048_SHA256)
    backend.create_key(SIGN_KEY, KeyAlgorithm.RSA_SIGN_PSS_2048_SHA256)
    client = CloudKmsHttpClient("https://kms.example.test", access_token="t", session=_LoopbackSession(backend))
    return AsymmetricOperations(client)


def test_encrypt_decrypt_over_http(ops: AsymmetricOperations) -> None:
    ciphertext = ops.encrypt_rsa("my message", DECRYPT_KEY)
    assert ops.decrypt_rsa(ciphertext, DECRYPT_KEY) == "my message"


def test_sign_verify_over_http(ops: AsymmetricOperations) -> None:
    signature = ops.sign_asymmetric("my message", SIGN_KEY)
    ops.verify_signature_rsa(signature, "my message", SIGN_KEY)
    with pytest.raises(VerificationFailed):
        ops.verify_signature_rsa(signature, "my message!", SIGN_KEY)


def test_missing_key_over_http(ops: AsymmetricOperations) -> None:
    with pytest.raises(FetchFailed) as info:
        ops.get_public_key("projects/p/locations/global/keyRings/r/cryptoKeys/gone/cryptoKeyVersions/1")
    assert info.value.__cause__.status == 404
