"""Configuration loading utilities for kms-envelope."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import runtime_config_dir

TOKEN_ENV = "KMS_ACCESS_TOKEN"


class KeyServiceConfig(BaseModel):
    backend: str = Field(default="http", description="http|memory|module:Class")
    endpoint: str = Field(default="https://cloudkms.googleapis.com")
    access_token: Optional[str] = Field(default=None, description="OAuth2 bearer token")
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("endpoint")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError(f"Endpoint '{value}' must be an http(s) URL")
        return value.rstrip("/")

    def resolved_token(self) -> Optional[str]:
        return self.access_token or os.getenv(TOKEN_ENV)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppConfig(BaseModel):
    key_service: KeyServiceConfig = Field(default_factory=KeyServiceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".kms" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
                return AppConfig.model_validate(data)
            except (yaml.YAMLError, ValidationError) as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
