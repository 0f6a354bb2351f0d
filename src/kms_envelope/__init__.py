"""Local envelope handling for asymmetric keys held by a remote key service."""

from .core.exceptions import (
    DecodeFailed,
    DecryptRequestFailed,
    EncryptFailed,
    FetchFailed,
    KeyServiceError,
    KeyTypeMismatch,
    KmsEnvelopeError,
    ParseFailed,
    SignatureParseFailed,
    SignRequestFailed,
    VerificationFailed,
)
from .crypto.keys import EcPublicKey, PublicKey, RsaPublicKey, parse_public_key
from .kms import CloudKmsHttpClient, InMemoryKeyService, KeyService, key_version_name
from .models import EcSignature, KeyAlgorithm
from .services import AsymmetricOperations
from .version import __version__

__all__ = [
    "__version__",
    "AsymmetricOperations",
    "KeyService",
    "CloudKmsHttpClient",
    "InMemoryKeyService",
    "key_version_name",
    "KeyAlgorithm",
    "EcSignature",
    "PublicKey",
    "RsaPublicKey",
    "EcPublicKey",
    "parse_public_key",
    "KmsEnvelopeError",
    "FetchFailed",
    "ParseFailed",
    "KeyTypeMismatch",
    "DecodeFailed",
    "EncryptFailed",
    "DecryptRequestFailed",
    "SignRequestFailed",
    "SignatureParseFailed",
    "VerificationFailed",
    "KeyServiceError",
]
