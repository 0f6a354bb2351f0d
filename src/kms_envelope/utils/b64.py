
import base64
import binascii


def b64e(data: bytes) -> str:
    """Standard base64 encode with padding, as the key service expects"""
    return base64.b64encode(data).decode("ascii")


def b64d(value: str | bytes) -> bytes:
    """Strict standard base64 decode.

    Characters outside the alphabet and bad padding raise ``ValueError``
    instead of being silently discarded.
    """
    if isinstance(value, str):
        try:
            value = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise ValueError("base64 text must be ASCII") from exc
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64: {exc}") from exc
