from hypothesis import HealthCheck, given, settings, strategies as st
import pytest

from kms_envelope.core.exceptions import VerificationFailed
from kms_envelope.kms.memory import InMemoryKeyService
from kms_envelope.models import KeyAlgorithm
from kms_envelope.services.asymmetric import AsymmetricOperations

_service = InMemoryKeyService()
_service.create_key("decrypt", KeyAlgorithm.RSA_DECRYPT_OAEP_2048_SHA256)
_service.create_key("pss", KeyAlgorithm.RSA_SIGN_PSS_2048_SHA256)
_service.create_key("ec", KeyAlgorithm.EC_SIGN_P256_SHA256)
_ops = AsymmetricOperations(_service)

_settings = settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])


def _tamper(message: bytes, index: int, flip: int) -> bytes:
    altered = bytearray(message)
    altered[index % len(altered)] ^= flip
    return bytes(altered)


@_settings
@given(st.text(max_size=40))
def test_oaep_round_trip(message: str) -> None:
    ciphertext = _ops.encrypt_rsa(message, "decrypt")
    assert _ops.decrypt_rsa(ciphertext, "decrypt") == message


@_settings
@given(st.binary(min_size=1, max_size=64), st.integers(min_value=0), st.integers(min_value=1, max_value=255))
def test_pss_rejects_any_altered_byte(message: bytes, index: int, flip: int) -> None:
    signature = _ops.sign_asymmetric(message, "pss")
    _ops.verify_signature_rsa(signature, message, "pss")
    with pytest.raises(VerificationFailed):
        _ops.verify_signature_rsa(signature, _tamper(message, index, flip), "pss")


@_settings
@given(st.binary(min_size=1, max_size=64), st.integers(min_value=0), st.integers(min_value=1, max_value=255))
def test_ecdsa_rejects_any_altered_byte(message: bytes, index: int, flip: int) -> None:
    signature = _ops.sign_asymmetric(message, "ec")
    _ops.verify_signature_ec(signature, message, "ec")
    with pytest.raises(VerificationFailed):
        _ops.verify_signature_ec(signature, _tamper(message, index, flip), "ec")
