"""Message classes for the webauthn-app protocol.

This module provides the message types exchanged during registration and
authentication, along with the base classes they are built on.
"""

from webauthn_app.messages.authentication import (
    CredentialAssertion,
    GetOptions,
    GetOptionsRequest,
)
from webauthn_app.messages.message import Message
from webauthn_app.messages.options import WebAuthnOptions
from webauthn_app.messages.registration import (
    CreateOptions,
    CreateOptionsRequest,
    CredentialAttestation,
)
from webauthn_app.messages.response import ServerResponse
from webauthn_app.messages.schema import Field

__all__ = [
    # Base classes
    "Field",
    "Message",
    "ServerResponse",
    "WebAuthnOptions",
    # Registration
    "CreateOptionsRequest",
    "CreateOptions",
    "CredentialAttestation",
    # Authentication
    "GetOptionsRequest",
    "GetOptions",
    "CredentialAssertion",
]
