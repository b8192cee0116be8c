"""Registration message types for webauthn-app.

The registration exchange is:

    1a. client >>> CreateOptionsRequest >>> server
    1b. client <<< CreateOptions        <<< server
    2a. client >>> CredentialAttestation >>> server
    2b. client <<< ServerResponse       <<< server
"""

from __future__ import annotations

from webauthn_app.messages.message import Message
from webauthn_app.messages.response import ServerResponse
from webauthn_app.messages.schema import Field
from webauthn_app.messages.shapes import (
    ATTESTATION,
    AUTHENTICATOR_SELECTION,
    CREDENTIAL_DESCRIPTOR,
    EXTENSIONS,
    PUBLIC_KEY,
)


class CreateOptionsRequest(Message):
    """Request sent to the server to begin registration.

    The wire structure is:
    {
        "username": "<non-empty string>",
        "displayName": "<non-empty string>",
        "authenticatorSelection": {...},      (optional)
        "attestation": "direct" | "none" | "indirect"   (optional)
    }
    """

    fields = (
        Field("username", "non-empty-string"),
        Field("displayName", "non-empty-string"),
        AUTHENTICATOR_SELECTION,
        ATTESTATION,
    )


class CreateOptions(ServerResponse):
    """Server reply carrying the parameters for creating a credential.

    Binary members are ``user.id``, ``challenge`` and every
    ``excludeCredentials[].id``. The challenge is opaque to the client and
    is passed through to the credential container unmodified.
    """

    fields = ServerResponse.fields + (
        Field(
            "rp",
            "object",
            fields=(
                Field("name", "non-empty-string"),
                Field("id", "non-empty-string", required=False),
                Field("icon", "non-empty-string", required=False),
            ),
        ),
        Field(
            "user",
            "object",
            fields=(
                Field("name", "non-empty-string"),
                Field("id", "base64url", binary=True),
                Field("displayName", "non-empty-string"),
                Field("icon", "non-empty-string", required=False),
            ),
        ),
        Field("challenge", "base64url", binary=True),
        Field(
            "pubKeyCredParams",
            "array",
            fields=(
                Field("alg", "number"),
                Field("type", "string", choices=(PUBLIC_KEY,)),
            ),
        ),
        Field("timeout", "positive-integer", required=False),
        Field("excludeCredentials", "array", required=False, fields=CREDENTIAL_DESCRIPTOR),
        AUTHENTICATOR_SELECTION,
        ATTESTATION,
        EXTENSIONS,
    )


class CredentialAttestation(Message):
    """The result of a registration ceremony, sent back to the server.

    The wire structure is:
    {
        "rawId": "<base64url>",
        "response": {
            "attestationObject": "<base64url>",
            "clientDataJSON": "<base64url>"
        }
    }
    """

    fields = (
        Field("rawId", "base64url", binary=True),
        Field(
            "response",
            "object",
            fields=(
                Field("attestationObject", "base64url", binary=True),
                Field("clientDataJSON", "base64url", binary=True),
            ),
        ),
    )
