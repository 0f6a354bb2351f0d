# Asymmetric key operations delegated to a remote key service.
from __future__ import annotations

import contextlib
from typing import Iterator, Optional

import structlog

from ..core.exceptions import (
    DecodeFailed,
    DecryptRequestFailed,
    FetchFailed,
    KeyServiceError,
    KmsEnvelopeError,
    SignRequestFailed,
)
from ..crypto.asymmetric import (
    RandFunc,
    decode_ec_signature,
    ecdsa_verify,
    rsa_oaep_encrypt,
    rsa_pss_verify,
)
from ..crypto.hasher import sha256_digest, to_bytes
from ..crypto.keys import PublicKey, parse_public_key, require_ec, require_rsa
from ..kms.base import KeyService
from ..logging import get_logger
from ..utils.b64 import b64d, b64e

log = get_logger(__name__)


class AsymmetricOperations:
    """Encrypt, decrypt, sign and verify with keys held by a key service.

    Holds nothing but the service handle: keys are fetched and parsed on
    every call, so one instance can be shared between threads.
    """

    def __init__(self, service: KeyService):
        self.service = service

    def get_public_key(self, key_name: str) -> PublicKey:
        op = "get_public_key"
        with _logged(op, key_name):
            return self._resolve(key_name, op)

    def encrypt_rsa(
        self,
        message: str | bytes,
        key_name: str,
        *,
        randfunc: Optional[RandFunc] = None,
    ) -> str:
        op = "encrypt_rsa"
        with _logged(op, key_name):
            key = require_rsa(self._resolve(key_name, op), op=op)
            ciphertext = rsa_oaep_encrypt(key, to_bytes(message), randfunc=randfunc, op=op)
            return b64e(ciphertext)

    def decrypt_rsa(self, ciphertext: str, key_name: str) -> str:
        op = "decrypt_rsa"
        with _logged(op, key_name):
            try:
                plaintext_b64 = self.service.asymmetric_decrypt(key_name, ciphertext)
            except KeyServiceError as exc:
                raise DecryptRequestFailed("decryption request failed", op=op) from exc
            try:
                return b64d(plaintext_b64).decode("utf-8")
            except ValueError as exc:
                raise DecodeFailed("failed to decode decrypted plaintext", op=op) from exc

    def _resolve(self, key_name: str, op: str) -> PublicKey:
        try:
            pem = self.service.get_public_key(key_name)
        except KeyServiceError as exc:
            raise FetchFailed("failed to fetch public key", op=op) from exc
        key = parse_public_key(pem, op=op)
        log.debug("public_key_resolved", kind=key.kind)
        return key

    def sign_asymmetric(self, message: str | bytes, key_name: str) -> str:
        op = "sign_asymmetric"
        with _logged(op, key_name):
            digest = b64e(sha256_digest(message))
            try:
                return self.service.asymmetric_sign(key_name, digest)
            except KeyServiceError as exc:
                raise SignRequestFailed("asymmetric sign request failed", op=op) from exc

    def verify_signature_rsa(self, signature: str, message: str | bytes, key_name: str) -> None:
        """Check an RSA_SIGN_PSS_*_SHA256 signature over ``message``.

        Raises ``VerificationFailed`` when the signature does not match, and
        ``DecodeFailed`` when ``signature`` is not base64 at all.
        """
        op = "verify_signature_rsa"
        with _logged(op, key_name):
            key = require_rsa(self._resolve(key_name, op), op=op)
            raw = _decode_signature(signature, op)
            rsa_pss_verify(key, raw, sha256_digest(message), op=op)

    def verify_signature_ec(self, signature: str, message: str | bytes, key_name: str) -> None:
        """Check an EC_SIGN_P*_SHA256 signature over ``message``.

        ``signature`` is base64 of a DER ``SEQUENCE { r, s }``; a body that is
        not such a sequence raises ``SignatureParseFailed``.
        """
        op = "verify_signature_ec"
        with _logged(op, key_name):
            key = require_ec(self._resolve(key_name, op), op=op)
            parsed = decode_ec_signature(_decode_signature(signature, op), op=op)
            ecdsa_verify(key, parsed, sha256_digest(message), op=op)


def _decode_signature(signature: str, op: str) -> bytes:
    try:
        return b64d(signature)
    except ValueError as exc:
        raise DecodeFailed("failed to decode signature string", op=op) from exc


@contextlib.contextmanager
def _logged(op: str, key_name: str) -> Iterator[None]:
    with structlog.contextvars.bound_contextvars(op=op, key_name=key_name):
        log.debug("operation_started")
        try:
            yield
        except KmsEnvelopeError as exc:
            log.warning("operation_failed", error=type(exc).__name__)
            raise
        log.info("operation_succeeded")
