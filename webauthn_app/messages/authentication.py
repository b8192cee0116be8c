"""Authentication message types for webauthn-app.

The authentication exchange is:

    1a. client >>> GetOptionsRequest   >>> server
    1b. client <<< GetOptions          <<< server
    2a. client >>> CredentialAssertion >>> server
    2b. client <<< ServerResponse      <<< server
"""

from __future__ import annotations

from webauthn_app.messages.message import Message
from webauthn_app.messages.response import ServerResponse
from webauthn_app.messages.schema import Field
from webauthn_app.messages.shapes import CREDENTIAL_DESCRIPTOR, EXTENSIONS, USER_VERIFICATION


class GetOptionsRequest(Message):
    """Request sent to the server to begin authentication."""

    fields = (
        Field("username", "non-empty-string"),
        Field("displayName", "non-empty-string"),
    )


class GetOptions(ServerResponse):
    """Server reply carrying the parameters for producing an assertion.

    Binary members are ``challenge`` and every ``allowCredentials[].id``.
    """

    fields = ServerResponse.fields + (
        Field("challenge", "base64url", binary=True),
        Field("timeout", "positive-integer", required=False),
        Field("rpId", "non-empty-string", required=False),
        Field("allowCredentials", "array", required=False, fields=CREDENTIAL_DESCRIPTOR),
        Field("userVerification", "string", required=False, choices=USER_VERIFICATION),
        EXTENSIONS,
    )


class CredentialAssertion(Message):
    """The result of an authentication ceremony, sent back to the server.

    ``response.userHandle`` may be ``null`` on the wire. A ``null`` handle
    decodes to ``b""`` and an empty handle encodes back to ``null``, so an
    empty handle and an absent one cannot be told apart once decoded.
    """

    fields = (
        Field("rawId", "base64url", binary=True),
        Field(
            "response",
            "object",
            fields=(
                Field("authenticatorData", "base64url", binary=True),
                Field("clientDataJSON", "base64url", binary=True),
                Field("signature", "base64url", binary=True),
                Field("userHandle", "nullable-base64", required=False, binary=True),
            ),
        ),
    )
