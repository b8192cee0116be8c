"""Encoding package for webauthn-app.

This package provides the base64url codec used for binary message fields.
"""

from .base64url import coerce_to_base64url, coerce_to_bytes, decode_binary, encode_binary

__all__ = [
    "coerce_to_base64url",
    "coerce_to_bytes",
    "decode_binary",
    "encode_binary",
]
