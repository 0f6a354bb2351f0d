"""Key service backend speaking the Cloud KMS REST v1 API."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

import requests

from ..config import TOKEN_ENV
from ..core.exceptions import KeyServiceError
from ..logging import get_logger
from .base import KeyService

DEFAULT_ENDPOINT = "https://cloudkms.googleapis.com"
DEFAULT_TIMEOUT = 30.0

log = get_logger(__name__)


class CloudKmsHttpClient(KeyService):
    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        access_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._token = access_token or os.getenv(TOKEN_ENV)
        self._session = session or requests.Session()

    def get_public_key(self, name: str) -> str:
        payload = self._call("GET", f"{name}/publicKey")
        return _field(payload, "pem")

    def asymmetric_decrypt(self, name: str, ciphertext: str) -> str:
        payload = self._call("POST", f"{name}:asymmetricDecrypt", {"ciphertext": ciphertext})
        return _field(payload, "plaintext")

    def asymmetric_sign(self, name: str, digest: str) -> str:
        payload = self._call("POST", f"{name}:asymmetricSign", {"digest": {"sha256": digest}})
        return _field(payload, "signature")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _call(self, method: str, path: str, body: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        url = f"{self.endpoint}/v1/{path}"
        log.debug("kms_request", method=method, path=path)
        try:
            resp = self._session.request(
                method, url, json=body, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise KeyServiceError(f"request to {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise KeyServiceError(
                f"{method} {path} returned {resp.status_code}: {_error_message(resp)}",
                status=resp.status_code,
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise KeyServiceError(f"{method} {path} returned a non-JSON body", status=resp.status_code) from exc
        if not isinstance(payload, dict):
            raise KeyServiceError(f"{method} {path} returned an unexpected body", status=resp.status_code)
        return payload


def _field(payload: Mapping[str, Any], name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        raise KeyServiceError(f"response is missing the '{name}' field")
    return value


def _error_message(resp: requests.Response) -> str:
    try:
        error = resp.json().get("error", {})
        message = error.get("message")
    except (ValueError, AttributeError):
        message = None
    return message or resp.reason or "unknown error"
