from .base import KeyService, key_version_name
from .http import CloudKmsHttpClient
from .loader import load_key_service
from .memory import InMemoryKeyService

__all__ = [
    "KeyService",
    "key_version_name",
    "CloudKmsHttpClient",
    "InMemoryKeyService",
    "load_key_service",
]
