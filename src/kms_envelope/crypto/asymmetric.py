"""RSA-OAEP encryption, RSA-PSS and ECDSA verification against service keys.

Every routine here works on public material only. Private-key operations
(decrypt, sign) happen inside the key service.
"""

from __future__ import annotations

from typing import Callable, Optional

from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, encode_dss_signature
from pyasn1.codec.der import decoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import namedtype, univ

from ..core.exceptions import EncryptFailed, SignatureParseFailed, VerificationFailed
from ..models import EcSignature
from .hasher import DIGEST_SIZE
from .keys import EcPublicKey, RsaPublicKey

RandFunc = Callable[[int], bytes]


class _DerSignature(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("r", univ.Integer()),
        namedtype.NamedType("s", univ.Integer()),
    )


def oaep_max_plaintext(key: RsaPublicKey) -> int:
    """Largest message RSA-OAEP-SHA256 can carry under ``key``"""
    return (key.key_size + 7) // 8 - 2 * DIGEST_SIZE - 2


def rsa_oaep_encrypt(
    key: RsaPublicKey,
    plaintext: bytes,
    *,
    randfunc: Optional[RandFunc] = None,
    op: str = "encrypt_rsa",
) -> bytes:
    """OAEP with SHA-256 for both the hash and MGF1, empty label.

    ``randfunc`` supplies the padding seed; leave it unset outside tests.
    """
    limit = oaep_max_plaintext(key)
    if len(plaintext) > limit:
        raise EncryptFailed(
            f"message is {len(plaintext)} bytes, key accepts at most {limit}", op=op
        )
    rsa_key = RSA.construct((key.modulus, key.exponent))
    options = {"hashAlgo": SHA256}
    if randfunc is not None:
        options["randfunc"] = randfunc
    try:
        return PKCS1_OAEP.new(rsa_key, **options).encrypt(plaintext)
    except (ValueError, TypeError) as exc:
        raise EncryptFailed("encryption failed", op=op) from exc


def pss_padding() -> padding.PSS:
    return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=DIGEST_SIZE)


def rsa_pss_verify(
    key: RsaPublicKey, signature: bytes, digest: bytes, *, op: str = "verify_signature_rsa"
) -> None:
    try:
        key.key.verify(signature, digest, pss_padding(), Prehashed(hashes.SHA256()))
    except (InvalidSignature, ValueError) as exc:
        raise VerificationFailed("signature verification failed", op=op) from exc


def decode_ec_signature(der: bytes, *, op: str = "verify_signature_ec") -> EcSignature:
    """Split ``SEQUENCE { INTEGER r, INTEGER s }`` into its integers.

    The integers keep their sign; range checks belong to ``ecdsa_verify``.
    """
    try:
        parsed, rest = decoder.decode(der, asn1Spec=_DerSignature())
        r, s = int(parsed["r"]), int(parsed["s"])
    except PyAsn1Error as exc:
        raise SignatureParseFailed("failed to parse signature bytes", op=op) from exc
    if rest:
        raise SignatureParseFailed("trailing data after signature", op=op)
    return EcSignature(r=r, s=s)


def ecdsa_verify(
    key: EcPublicKey,
    signature: EcSignature,
    digest: bytes,
    *,
    op: str = "verify_signature_ec",
) -> None:
    # Out-of-range or non-positive components are just invalid signatures.
    if signature.r <= 0 or signature.s <= 0:
        raise VerificationFailed("signature verification failed", op=op)
    der = encode_dss_signature(signature.r, signature.s)
    try:
        key.key.verify(der, digest, ec.ECDSA(Prehashed(hashes.SHA256())))
    except (InvalidSignature, ValueError) as exc:
        raise VerificationFailed("signature verification failed", op=op) from exc


__all__ = [
    "RandFunc",
    "oaep_max_plaintext",
    "rsa_oaep_encrypt",
    "pss_padding",
    "rsa_pss_verify",
    "decode_ec_signature",
    "ecdsa_verify",
]
