"""Webauthn-app interfaces package.

This package provides protocol definitions for network I/O, the host
credential container, lifecycle observers and endpoint paths.
"""

from .credentials import (
    AuthenticatorAssertionResponse,
    AuthenticatorAttestationResponse,
    ICredentialContainer,
    PublicKeyCredential,
)
from .events import DebugSubtype, Event, IObserver
from .io import INetwork, NetworkResponse
from .paths import POST, AuthenticationPaths, RegistrationPaths, WebAuthnPaths

__all__ = [
    # credentials
    "AuthenticatorAssertionResponse",
    "AuthenticatorAttestationResponse",
    "ICredentialContainer",
    "PublicKeyCredential",
    # events
    "DebugSubtype",
    "Event",
    "IObserver",
    # io
    "INetwork",
    "NetworkResponse",
    # paths
    "POST",
    "AuthenticationPaths",
    "RegistrationPaths",
    "WebAuthnPaths",
]
