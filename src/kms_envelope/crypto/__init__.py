from .asymmetric import decode_ec_signature, ecdsa_verify, rsa_oaep_encrypt, rsa_pss_verify
from .hasher import sha256_digest
from .keys import EcPublicKey, PublicKey, RsaPublicKey, parse_public_key, require_ec, require_rsa

__all__ = [
    "PublicKey",
    "RsaPublicKey",
    "EcPublicKey",
    "parse_public_key",
    "require_rsa",
    "require_ec",
    "rsa_oaep_encrypt",
    "rsa_pss_verify",
    "decode_ec_signature",
    "ecdsa_verify",
    "sha256_digest",
]
