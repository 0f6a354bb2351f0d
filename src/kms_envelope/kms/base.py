from __future__ import annotations

from abc import ABC, abstractmethod


class KeyService(ABC):
    """The asymmetric capabilities of a remote key manager.

    Every payload crossing this boundary is standard base64 text; public keys
    are PEM. Implementations raise ``KeyServiceError`` for transport failures
    and service-side refusals alike.
    """

    @abstractmethod
    def get_public_key(self, name: str) -> str:
        """Return the PEM encoded public key of key version ``name``"""

    @abstractmethod
    def asymmetric_decrypt(self, name: str, ciphertext: str) -> str:
        """Decrypt base64 ``ciphertext`` and return base64 plaintext"""

    @abstractmethod
    def asymmetric_sign(self, name: str, digest: str) -> str:
        """Sign a base64 SHA-256 ``digest`` and return a base64 signature"""


def key_version_name(project: str, location: str, key_ring: str, key: str, version: str | int) -> str:
    return (
        f"projects/{project}/locations/{location}/keyRings/{key_ring}"
        f"/cryptoKeys/{key}/cryptoKeyVersions/{version}"
    )
