"""Webauthn-app Python implementation.

This package implements the client message layer of the WebAuthn
registration and login exchanges: the messages sent to and received from a
relying party, strict validation of every one of them, and the conversion
of binary fields between raw bytes and base64url text.

Main Components:
    - WebAuthnClient: Drives registration and authentication
    - Transport: Sends messages and parses typed replies
    - Messages: Protocol message types
    - Interfaces: Protocol definitions for network, credentials, observers

Example:
    >>> from webauthn_app import WebAuthnClient, WebAuthnClientConfig
    >>> # Configure with your network and credential container, then
    >>> # await client.register("alice") / await client.login("alice")
"""

from webauthn_app.api import (
    CredentialsConfig,
    IOConfig,
    PreferencesConfig,
    Transport,
    WebAuthnClient,
    WebAuthnClientConfig,
)
from webauthn_app.exceptions import (
    CoercionError,
    CredentialError,
    ProtocolError,
    StructuralError,
    TransportError,
    ValidationError,
    WebAuthnError,
)

__version__ = "0.1.0"

__all__ = [
    # API
    "WebAuthnClient",
    "Transport",
    "WebAuthnClientConfig",
    "CredentialsConfig",
    "IOConfig",
    "PreferencesConfig",
    # Exceptions
    "WebAuthnError",
    "StructuralError",
    "ValidationError",
    "CoercionError",
    "TransportError",
    "ProtocolError",
    "CredentialError",
]
