# Typed models shared by the key service backends and the operations layer.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class KeyPurpose(str, Enum):
    ASYMMETRIC_DECRYPT = "ASYMMETRIC_DECRYPT"
    ASYMMETRIC_SIGN = "ASYMMETRIC_SIGN"


class KeyAlgorithm(str, Enum):
    """Asymmetric key version algorithms, named as the key service names them"""

    RSA_DECRYPT_OAEP_2048_SHA256 = "RSA_DECRYPT_OAEP_2048_SHA256"
    RSA_DECRYPT_OAEP_3072_SHA256 = "RSA_DECRYPT_OAEP_3072_SHA256"
    RSA_SIGN_PSS_2048_SHA256 = "RSA_SIGN_PSS_2048_SHA256"
    RSA_SIGN_PSS_3072_SHA256 = "RSA_SIGN_PSS_3072_SHA256"
    EC_SIGN_P224_SHA256 = "EC_SIGN_P224_SHA256"
    EC_SIGN_P256_SHA256 = "EC_SIGN_P256_SHA256"

    @property
    def purpose(self) -> KeyPurpose:
        if "_DECRYPT_" in self.value:
            return KeyPurpose.ASYMMETRIC_DECRYPT
        return KeyPurpose.ASYMMETRIC_SIGN

    @property
    def is_rsa(self) -> bool:
        return self.value.startswith("RSA_")

    @property
    def key_size(self) -> int:
        """RSA modulus bits, or the EC curve's field size"""
        parts = self.value.split("_")
        size = parts[3] if self.is_rsa else parts[2]
        return int(size.lstrip("P"))


@dataclass(frozen=True, slots=True)
class EcSignature:
    """An ECDSA signature decomposed from its DER ``SEQUENCE { r, s }``"""
    r: int
    s: int


__all__ = ["KeyAlgorithm", "KeyPurpose", "EcSignature"]
