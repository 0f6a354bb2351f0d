from __future__ import annotations

import importlib
from typing import Any

from ..config import KeyServiceConfig
from .base import KeyService


def load_plugin(path: str, class_name: str) -> Any:
    """Dynamically load a key service class given module path and class name.

    Example: load_plugin('kms_envelope.kms.memory', 'InMemoryKeyService')
    """
    mod = importlib.import_module(path)
    return getattr(mod, class_name)


def load_key_service(config: KeyServiceConfig) -> KeyService:
    backend = config.backend.strip()
    if backend == "http":
        from .http import CloudKmsHttpClient

        return CloudKmsHttpClient(
            config.endpoint,
            access_token=config.resolved_token(),
            timeout=config.timeout_seconds,
        )
    if backend == "memory":
        from .memory import InMemoryKeyService

        return InMemoryKeyService()
    if ":" not in backend:
        raise ValueError(f"Unknown key service backend '{backend}'")

    module_path, class_name = backend.split(":", 1)
    cls = load_plugin(module_path, class_name)
    service = cls()
    if not isinstance(service, KeyService):
        raise ValueError(f"{backend} is not a KeyService implementation")
    return service
