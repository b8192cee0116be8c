"""Webauthn-app API package.

This package provides the client that drives the registration and
authentication exchanges, and the transport it sends messages with.
"""

from webauthn_app.api.client import (
    COSE_ALG_ES256,
    DEFAULT_TIMEOUT,
    CredentialsConfig,
    IOConfig,
    PreferencesConfig,
    WebAuthnClient,
    WebAuthnClientConfig,
)
from webauthn_app.api.notifier import Notifier
from webauthn_app.api.transport import Transport

__all__ = [
    # Client
    "WebAuthnClient",
    "Transport",
    "Notifier",
    # Client configuration types
    "WebAuthnClientConfig",
    "CredentialsConfig",
    "IOConfig",
    "PreferencesConfig",
    # Defaults
    "COSE_ALG_ES256",
    "DEFAULT_TIMEOUT",
]
