
from __future__ import annotations

"""Central exception hierarchy"""


class KmsEnvelopeError(Exception):
    """Base exception for all failures.

    ``op`` names the operation that failed; the underlying cause, when there
    is one, is chained via ``__cause__``.
    """

    def __init__(self, message: str, *, op: str) -> None:
        super().__init__(message)
        self.op = op

    def __str__(self) -> str:
        return f"{self.op}: {self.args[0]}"


class FetchFailed(KmsEnvelopeError):
    """Raised when the key service could not return a public key"""


class ParseFailed(KmsEnvelopeError):
    """Raised when a public key is not a PEM encoded RSA or EC PKIX key"""


class KeyTypeMismatch(KmsEnvelopeError):
    """Raised when an operation needs an RSA key and got EC, or vice versa"""


class DecodeFailed(KmsEnvelopeError):
    """Raised when a base64 payload (or decoded text) is malformed"""


class EncryptFailed(KmsEnvelopeError):
    """Raised when local RSA-OAEP encryption rejects its input"""


class DecryptRequestFailed(KmsEnvelopeError):
    """Raised when the key service refuses or fails a decrypt request"""


class SignRequestFailed(KmsEnvelopeError):
    """Raised when the key service refuses or fails a sign request"""


class SignatureParseFailed(KmsEnvelopeError):
    """Raised when an EC signature is not a DER SEQUENCE of two INTEGERs"""


class VerificationFailed(KmsEnvelopeError):
    """Raised when a signature does not verify. Carries no reason."""


class KeyServiceError(Exception):
    """Raised by key service backends for transport or service-side failures"""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


__all__ = [
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
