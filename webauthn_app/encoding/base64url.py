"""URL-safe base64 codec.

This module converts between raw bytes and the unpadded base64url text used
for binary fields on the wire. The ``coerce_*`` helpers normalize the
binary representations a host might hand over (``bytes``, ``bytearray``,
``memoryview``, ``array.array`` or a plain list of byte values) before
encoding, so callers never need to convert first.
"""

from __future__ import annotations

import array
import base64
import binascii
from typing import Any

from webauthn_app.exceptions import CoercionError


def encode_binary(data: bytes) -> str:
    """Encode bytes to an unpadded URL-safe base64 string.

    Args:
        data: The bytes to encode.

    Returns:
        The base64url text, without ``=`` padding.
    """
    encoded = base64.b64encode(bytes(data)).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_").rstrip("=")


def decode_binary(text: str) -> bytes:
    """Decode URL-safe base64 text to bytes.

    Padding is optional on input; missing ``=`` characters are restored
    before decoding.

    Args:
        text: The base64url text to decode.

    Returns:
        The decoded bytes.

    Raises:
        CoercionError: If the text is not valid base64url, or is not the
            canonical encoding of the bytes it decodes to.
    """
    standard = text.replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)

    try:
        data = base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CoercionError("text", f"could not decode base64url text: {text!r}") from e

    # unused trailing bits must be zero so every byte string has one encoding
    if encode_binary(data) != text.rstrip("="):
        raise CoercionError("text", f"non-canonical base64url text: {text!r}")

    return data


def _to_bytes(thing: Any, name: str) -> bytes:
    if isinstance(thing, bytes):
        return thing

    if isinstance(thing, (bytearray, memoryview, array.array)):
        return memoryview(thing).tobytes()

    if isinstance(thing, (list, tuple)):
        try:
            return bytes(thing)
        except (TypeError, ValueError) as e:
            raise CoercionError(name, f"could not coerce '{name}' to bytes") from e

    raise CoercionError(name, f"could not coerce '{name}' to bytes")


def coerce_to_bytes(thing: Any, name: str = "''") -> bytes:
    """Coerce base64url text or a host binary value to bytes.

    Args:
        thing: Base64url text, or any supported binary representation.
        name: Field name used in error messages.

    Returns:
        The value as ``bytes``.

    Raises:
        CoercionError: If the value cannot be converted.
    """
    if isinstance(thing, str):
        try:
            return decode_binary(thing)
        except CoercionError as e:
            raise CoercionError(name, f"could not coerce '{name}' to bytes") from e

    return _to_bytes(thing, name)


def coerce_to_base64url(thing: Any, name: str = "''") -> str:
    """Coerce a host binary value (or base64 text) to unpadded base64url text.

    Text input is assumed to already be base64 or base64url; it is
    normalized to the URL-safe alphabet with padding stripped.

    Args:
        thing: Any supported binary representation, or base64 text.
        name: Field name used in error messages.

    Returns:
        The base64url text.

    Raises:
        CoercionError: If the value cannot be converted.
    """
    if isinstance(thing, str):
        return thing.replace("+", "-").replace("/", "_").rstrip("=")

    try:
        return encode_binary(_to_bytes(thing, name))
    except CoercionError as e:
        raise CoercionError(name, f"could not coerce '{name}' to string") from e
