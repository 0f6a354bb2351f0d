
from __future__ import annotations

from ..crypto.hasher import sha256_digest
from .b64 import b64d, b64e

__all__ = [
    "b64e",
    "b64d",
    "sha256_digest",
]
