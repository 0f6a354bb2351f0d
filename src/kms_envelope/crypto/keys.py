"""Public keys handed out by the key service.

``parse_public_key`` turns the service's PEM/PKIX text into one of two
tagged, immutable values, ``RsaPublicKey`` or ``EcPublicKey``. Operations
that only make sense for one key family narrow the union with
``require_rsa``/``require_ec`` instead of casting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from ..core.exceptions import KeyTypeMismatch, ParseFailed

_PEM_BEGIN = b"-----BEGIN "
_PKIX_BEGIN = b"-----BEGIN PUBLIC KEY-----"


@dataclass(frozen=True, slots=True)
class RsaPublicKey:
    key: rsa.RSAPublicKey
    kind: Literal["RSA"] = "RSA"

    @property
    def modulus(self) -> int:
        return self.key.public_numbers().n

    @property
    def exponent(self) -> int:
        return self.key.public_numbers().e

    @property
    def key_size(self) -> int:
        return self.key.key_size


@dataclass(frozen=True, slots=True)
class EcPublicKey:
    key: ec.EllipticCurvePublicKey
    kind: Literal["EC"] = "EC"

    @property
    def curve(self) -> str:
        return self.key.curve.name

    @property
    def point(self) -> tuple[int, int]:
        numbers = self.key.public_numbers()
        return numbers.x, numbers.y


PublicKey = Union[RsaPublicKey, EcPublicKey]


def parse_public_key(pem: str | bytes, *, op: str = "get_public_key") -> PublicKey:
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    if _PEM_BEGIN not in data:
        raise ParseFailed("no PEM block found in public key", op=op)
    if _PKIX_BEGIN not in data:
        raise ParseFailed("expected a PKIX PUBLIC KEY block", op=op)
    try:
        loaded = serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ParseFailed("failed to parse public key", op=op) from exc
    if isinstance(loaded, rsa.RSAPublicKey):
        return RsaPublicKey(loaded)
    if isinstance(loaded, ec.EllipticCurvePublicKey):
        return EcPublicKey(loaded)
    raise ParseFailed(f"unsupported public key type {type(loaded).__name__}", op=op)


def require_rsa(key: PublicKey, *, op: str) -> RsaPublicKey:
    if isinstance(key, RsaPublicKey):
        return key
    raise KeyTypeMismatch(f"expected an RSA key, got {key.kind}", op=op)


def require_ec(key: PublicKey, *, op: str) -> EcPublicKey:
    if isinstance(key, EcPublicKey):
        return key
    raise KeyTypeMismatch(f"expected an EC key, got {key.kind}", op=op)


__all__ = [
    "PublicKey",
    "RsaPublicKey",
    "EcPublicKey",
    "parse_public_key",
    "require_rsa",
    "require_ec",
]
