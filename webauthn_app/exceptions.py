"""Exception classes for webauthn-app.

This module defines the error taxonomy used throughout the library. Every
failure raised while building, validating, coercing, transmitting or
receiving a message is one of these types, so callers can tell apart a
malformed message from a transport outage or a server-side rejection.
"""

from __future__ import annotations

from typing import Optional


class WebAuthnError(Exception):
    """Base exception class for all webauthn-app errors."""

    pass


class StructuralError(WebAuthnError):
    """Exception raised when input cannot be parsed into an object shape."""

    pass


class ValidationError(WebAuthnError):
    """Exception raised when a declared field fails its format rule.

    Attributes:
        field: Dotted path of the offending field, e.g. ``user.id``.
        expected: Human-readable description of the expected format.
    """

    def __init__(self, field: str, expected: str, detail: Optional[str] = None) -> None:
        self.field = field
        self.expected = expected
        message = f"expected '{field}' to be {expected}"
        if detail is not None:
            message = f"{message}, got: {detail}"
        super().__init__(message)


class CoercionError(WebAuthnError):
    """Exception raised when a value cannot be converted between bytes and text.

    Attributes:
        field: Name of the field being coerced.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class TransportError(WebAuthnError):
    """Exception raised for transport-level failures.

    Covers failures of the underlying network call, non-success status
    codes and response bodies that are not a well-formed message envelope.

    Attributes:
        status: HTTP status code, when the server answered at all.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class ProtocolError(WebAuthnError):
    """Exception raised when the server replies with ``status == "failed"``.

    Attributes:
        server_message: The server-supplied error message, verbatim.
    """

    def __init__(self, server_message: str) -> None:
        self.server_message = server_message
        super().__init__(server_message)


class CredentialError(WebAuthnError):
    """Base exception for credential container failures.

    Host implementations of ``ICredentialContainer`` may raise this (or any
    other exception) when the user declines or no authenticator is
    available. The client re-raises collaborator errors unchanged.
    """

    pass
