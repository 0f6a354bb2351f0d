# SHA-256 digests of messages handed to the key service.
from __future__ import annotations
from cryptography.hazmat.primitives import hashes

DIGEST_SIZE = 32


def to_bytes(message: str | bytes) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return message


def sha256_digest(message: str | bytes) -> bytes:
    h = hashes.Hash(hashes.SHA256())
    h.update(to_bytes(message))
    return h.finalize()
