"""In-process key service holding real private keys.

Stands in for the remote service in tests and local experiments. It
performs the same private-key operations the service would, so everything
it returns can be checked with the public-key routines in ``crypto``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed

from ..core.exceptions import KeyServiceError
from ..crypto.asymmetric import pss_padding
from ..crypto.hasher import DIGEST_SIZE
from ..models import KeyAlgorithm, KeyPurpose
from ..utils.b64 import b64d, b64e
from .base import KeyService

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]

_CURVES = {
    224: ec.SECP224R1,
    256: ec.SECP256R1,
}


@dataclass(frozen=True, slots=True)
class _KeyVersion:
    algorithm: KeyAlgorithm
    private_key: PrivateKey


def generate_private_key(algorithm: KeyAlgorithm) -> PrivateKey:
    if algorithm.is_rsa:
        return rsa.generate_private_key(public_exponent=65537, key_size=algorithm.key_size)
    return ec.generate_private_key(_CURVES[algorithm.key_size]())


class InMemoryKeyService(KeyService):
    def __init__(self) -> None:
        self._keys: Dict[str, _KeyVersion] = {}

    def create_key(self, name: str, algorithm: KeyAlgorithm) -> None:
        self.import_key(name, algorithm, generate_private_key(algorithm))

    def import_key(self, name: str, algorithm: KeyAlgorithm, private_key: PrivateKey) -> None:
        if algorithm.is_rsa != isinstance(private_key, rsa.RSAPrivateKey):
            raise KeyServiceError(f"key material does not match {algorithm.value}", status=400)
        self._keys[name] = _KeyVersion(algorithm=algorithm, private_key=private_key)

    def get_public_key(self, name: str) -> str:
        version = self._lookup(name)
        pem = version.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return pem.decode("ascii")

    def asymmetric_decrypt(self, name: str, ciphertext: str) -> str:
        version = self._lookup(name, KeyPurpose.ASYMMETRIC_DECRYPT)
        try:
            plaintext = version.private_key.decrypt(
                b64d(ciphertext),
                padding.OAEP(
                    mgf=padding.MGF1(algorithm=hashes.SHA256()),
                    algorithm=hashes.SHA256(),
                    label=None,
                ),
            )
        except ValueError as exc:
            raise KeyServiceError("Decryption failed", status=400) from exc
        return b64e(plaintext)

    def asymmetric_sign(self, name: str, digest: str) -> str:
        version = self._lookup(name, KeyPurpose.ASYMMETRIC_SIGN)
        try:
            raw = b64d(digest)
        except ValueError as exc:
            raise KeyServiceError("digest is not valid base64", status=400) from exc
        if len(raw) != DIGEST_SIZE:
            raise KeyServiceError(f"digest must be {DIGEST_SIZE} bytes, got {len(raw)}", status=400)

        key = version.private_key
        if isinstance(key, rsa.RSAPrivateKey):
            signature = key.sign(raw, pss_padding(), Prehashed(hashes.SHA256()))
        else:
            signature = key.sign(raw, ec.ECDSA(Prehashed(hashes.SHA256())))
        return b64e(signature)

    def _lookup(self, name: str, purpose: KeyPurpose | None = None) -> _KeyVersion:
        version = self._keys.get(name)
        if version is None:
            raise KeyServiceError(f"key version {name} not found", status=404)
        if purpose is not None and version.algorithm.purpose is not purpose:
            raise KeyServiceError(
                f"{version.algorithm.value} keys do not support {purpose.value}", status=400
            )
        return version
